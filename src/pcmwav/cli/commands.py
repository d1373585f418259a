import json
from pathlib import Path
from typing import Annotated

import numpy as np
from cyclopts import App, Parameter
from rich.console import Console
from rich.table import Table

from pcmwav.cli.validators import validate_gain_factor, validate_sample_rate
from pcmwav.format import (
    AudioBuffer,
    WavError,
    decode_wave,
    load_wav,
    locate_chunks,
    save_wav,
    validate_samples,
)
from pcmwav.format.riff import CHUNK_HEADER_SIZE
from pcmwav.format.samples import quantization_step
from pcmwav.format.standard.reader import read_format_descriptor
from pcmwav.types import BitDepth

app = App(name="pcmwav", help="A utility for inspecting and re-encoding PCM WAV files")
console = Console()


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(message, style="bold red")


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(message, style="bold green")


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(message, style="bold yellow")


def _load_or_report(file: Path) -> AudioBuffer | None:
    try:
        return load_wav(file)
    except WavError as e:
        print_error(f"Error: {e}")
        return None


def _save_or_report(output: Path, buffer: AudioBuffer) -> bool:
    try:
        save_wav(output, buffer)
    except WavError as e:
        print_error(f"Error: {e}")
        return False
    return True


@app.command
def info(file: Path) -> int:
    """
    Display information about a WAV file.

    Parameters
    ----------
    file: Path
        The path to the .wav file
    """
    buffer = _load_or_report(file)
    if buffer is None:
        return 1

    table = Table(title=str(file), show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Sample rate", f"{buffer.sample_rate} Hz")
    table.add_row("Bit depth", f"{buffer.bit_depth}-bit")
    table.add_row("Channels", "mono" if buffer.channel_count == 1 else "stereo")
    table.add_row("Frames", str(buffer.frame_count))
    table.add_row("Duration", f"{buffer.duration_seconds:.3f} s")

    for i, channel in enumerate(buffer.channels):
        peak = float(np.max(np.abs(channel))) if channel.size else 0.0
        rms = float(np.sqrt(np.mean(channel.astype(np.float64) ** 2))) if channel.size else 0.0
        table.add_row(f"Channel {i}", f"peak={peak:.4f}, RMS={rms:.4f}")

    console.print(table)
    return 0


@app.command
def validate(
    file: Path,
    strict: bool = False,
    output_json: Annotated[bool, Parameter(name=["--json"])] = False,
) -> int:
    """
    Validate a WAV file.

    Checks RIFF structure, fmt/data chunk presence, header consistency,
    and sample data integrity.

    Parameters
    ----------
    file: Path
        The path to the .wav file to validate
    strict: bool
        Treat warnings as errors (default: False)
    output_json: bool
        Output results as JSON (default: False)
    """
    results: dict[str, object] = {
        "file": str(file),
        "valid": True,
        "errors": [],
        "warnings": [],
    }
    errors: list[str] = []
    warnings: list[str] = []

    def report() -> int:
        valid = not errors and not (strict and warnings)
        results["valid"] = valid
        results["errors"] = errors
        results["warnings"] = warnings
        if output_json:
            console.print(json.dumps(results, indent=2))
        elif valid:
            for warning in warnings:
                print_warning(f"[WARN] {warning}")
            print_success(f"[PASS] {file} is a valid PCM WAV file")
        else:
            for error in errors:
                print_error(f"[FAIL] {error}")
            for warning in warnings:
                print_warning(f"[WARN] {warning}")
        return 0 if valid else 1

    try:
        data = file.read_bytes()
    except OSError as e:
        errors.append(f"Cannot read file: {e}")
        return report()

    try:
        buffer = decode_wave(data)
    except WavError as e:
        errors.append(f"{e.kind.value}: {e}")
        return report()

    # Tag search can match inside sample data; flag files whose chunks are not where expected
    locations = locate_chunks(data)
    if locations.data_offset < locations.fmt_offset:
        warnings.append(
            f"data chunk (offset {locations.data_offset}) precedes "
            f"fmt chunk (offset {locations.fmt_offset})"
        )
    descriptor = read_format_descriptor(data, locations.fmt_offset)
    samples_end = (
        locations.data_offset + CHUNK_HEADER_SIZE + buffer.frame_count * descriptor.bytes_per_block
    )
    if samples_end < len(data):
        warnings.append(f"{len(data) - samples_end} bytes follow the sample data")

    sample_result = validate_samples(buffer)
    errors.extend(sample_result.errors)
    warnings.extend(sample_result.warnings)

    return report()


@app.command
def gain(
    input_file: Path,
    output: Path,
    amplify: Annotated[float | None, Parameter(validator=validate_gain_factor)] = None,
    attenuate: Annotated[float | None, Parameter(validator=validate_gain_factor)] = None,
    clamp: bool = False,
) -> int:
    """
    Apply gain to a WAV file and save the result.

    Parameters
    ----------
    input_file: Path
        The .wav file to read
    output: Path
        The destination .wav file
    amplify: float | None
        Scale every sample by (1 + amplify)
    attenuate: float | None
        Scale every sample by (1 - attenuate)
    clamp: bool
        Clamp samples to [-1, 1] after applying gain. Needed for 24-bit
        files, which wrap instead of clipping.
    """
    if amplify is None and attenuate is None:
        print_error("Error: specify --amplify and/or --attenuate")
        return 1

    buffer = _load_or_report(input_file)
    if buffer is None:
        return 1

    if amplify is not None:
        buffer.amplify(amplify)
    if attenuate is not None:
        buffer.attenuate(attenuate)

    if clamp:
        # +1.0 itself wraps at 24 bits, so stop one step short of it
        upper = 1.0 - quantization_step(24) if buffer.bit_depth == 24 else 1.0
        for channel in buffer.channels:
            np.clip(channel, -1.0, upper, out=channel)

    for warning in validate_samples(buffer).warnings:
        print_warning(f"Warning: {warning}")

    if not _save_or_report(output, buffer):
        return 1

    print_success(f"Wrote {buffer.frame_count} frames to {output}")
    return 0


@app.command
def convert(
    input_file: Path,
    output: Path,
    bit_depth: BitDepth = 16,
    sample_rate: Annotated[int | None, Parameter(validator=validate_sample_rate)] = None,
) -> int:
    """
    Re-encode a WAV file at a different bit depth.

    Parameters
    ----------
    input_file: Path
        The .wav file to read
    output: Path
        The destination .wav file
    bit_depth: BitDepth
        The bit depth of the output file (8, 16 or 24)
    sample_rate: int | None
        Relabel the output with this sample rate in Hz. Samples are not
        resampled, so this changes playback speed and pitch.
    """
    buffer = _load_or_report(input_file)
    if buffer is None:
        return 1

    console.print(f"Converting {buffer.bit_depth}-bit to {bit_depth}-bit...")
    buffer.bit_depth = bit_depth
    if sample_rate is not None:
        buffer.sample_rate = sample_rate

    if not _save_or_report(output, buffer):
        return 1

    print_success(f"Wrote {output}")
    return 0
