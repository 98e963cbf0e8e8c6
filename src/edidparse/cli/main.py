"""edidparse CLI - decode EDID blocks from files or stdin."""

from __future__ import annotations

import json
import re
from typing import BinaryIO

import click

from edidparse.utils.logging import setup_logging

_HEX = re.compile(r"^[0-9A-Fa-f]+$")


def _is_offset(token: str, following: str | None) -> bool:
    if token.endswith(":"):
        return True
    if not _HEX.match(token):
        return False
    # "0010  69 78 ..." style: offset column is odd-length or wider than the data
    return len(token) % 2 == 1 or (following is not None and len(token) > len(following))


def _hex_to_bytes(text: str) -> bytes:
    """Convert a text hex dump to bytes.

    Accepts xxd (grouped or -p), ioreg-style runs, and "offset  b0 b1 ..." lines.
    Each line is read up to its first non-hex token (the ASCII column).
    """
    out = bytearray()
    for line in text.splitlines():
        parts = line.split()
        if parts and _is_offset(parts[0], parts[1] if len(parts) > 1 else None):
            parts = parts[1:]
        for tok in parts:
            tok = tok.removeprefix("0x").rstrip(",")
            if not _HEX.match(tok) or len(tok) % 2:
                break
            out.extend(bytes.fromhex(tok))
    return bytes(out)


def _decode(ctx: click.Context, stream: BinaryIO, hex_input: bool, verify: bool):
    """Run the decoder on the given input, exiting with status 1 on failure."""
    from edidparse import DecodeOptions, EdidError, parse_bytes, parse_stream

    options = DecodeOptions(verify_checksum=verify)
    try:
        if hex_input:
            text = stream.read().decode("ascii", errors="ignore")
            return parse_bytes(_hex_to_bytes(text), options=options)
        return parse_stream(stream, options=options)
    except EdidError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


_input_argument = click.argument("source", type=click.File("rb"), default="-")
_hex_option = click.option(
    "--hex", "hex_input", is_flag=True,
    help="Input is a text hex dump (e.g. from xxd or ioreg) instead of raw bytes",
)
_verify_option = click.option(
    "--verify-checksum/--no-verify-checksum", default=True,
    help="Fail on a bad checksum (default) or only log it",
)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.pass_context
def cli(ctx: click.Context, debug: bool, json_output: bool) -> None:
    """edidparse - decode VESA EDID display identification blocks."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["json_output"] = json_output
    setup_logging(level="DEBUG" if debug else "WARNING", json_output=json_output)


@cli.command()
@_input_argument
@_hex_option
@_verify_option
@click.pass_context
def info(ctx: click.Context, source: BinaryIO, hex_input: bool, verify_checksum: bool) -> None:
    """Show identification summary of an EDID block."""
    from edidparse.summary import summarize

    edid = _decode(ctx, source, hex_input, verify_checksum)
    summary = summarize(edid)

    if ctx.obj.get("json_output"):
        click.echo(json.dumps(summary.model_dump(), indent=2))
        return

    click.echo(f"Manufacturer: {summary.manufacturer}")
    click.echo(f"  Product Code: 0x{summary.product_code_hex}")
    click.echo(f"  Serial Number: {summary.serial_number}")
    if summary.model_year:
        click.echo(f"  Model Year: {summary.manufacture_year}")
    else:
        click.echo(
            f"  Manufactured: week {summary.manufacture_week}, "
            f"{summary.manufacture_year}"
        )
    click.echo(f"EDID Version: {summary.version}")
    click.echo(f"  Input: {'digital' if summary.digital_input else 'analog'}")
    if summary.monitor_name:
        click.echo(f"  Name: {summary.monitor_name}")
    if summary.monitor_serial:
        click.echo(f"  Serial: {summary.monitor_serial}")
    if summary.screen_size_cm:
        width, height = summary.screen_size_cm
        click.echo(f"  Screen Size: {width:g} x {height:g} cm")
    if summary.gamma is not None:
        click.echo(f"  Gamma: {summary.gamma:.2f}")
    if summary.preferred_mode:
        click.echo(f"  Preferred Mode: {summary.preferred_mode}")
    click.echo(f"  Extensions: {summary.extension_count}")


@cli.command()
@_input_argument
@_hex_option
@_verify_option
@click.pass_context
def dump(ctx: click.Context, source: BinaryIO, hex_input: bool, verify_checksum: bool) -> None:
    """Dump the fully decoded EDID block as JSON."""
    from pydantic import TypeAdapter

    from edidparse.models import EDID

    edid = _decode(ctx, source, hex_input, verify_checksum)
    data = TypeAdapter(EDID).dump_python(edid, mode="json")
    click.echo(json.dumps(data, indent=2))


if __name__ == "__main__":
    cli()
