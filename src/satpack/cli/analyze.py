"""Schema analysis CLI command."""

from __future__ import annotations

from pathlib import Path

from ..codec.schema import Bottom, FieldKind, MessageConfig, iter_records
from ..config import LinkConfig
from ..parser import Parser
from ..utils.sizing import field_sizes, max_encoded_size


def analyze_file(file_path: Path, config: LinkConfig | None = None) -> None:
    """Analyze every record reachable from a JSON schema file.

    Args:
        file_path: Path to the schema document
        config: Link characteristics used for airtime estimates
    """
    config = config or LinkConfig()
    parser = Parser.from_text(file_path.read_text(encoding="utf-8"))
    records = list(iter_records(parser.schema))

    # Print header
    print("|" * 7, "satpack: Schema-Driven Compact Codec", "|" * 7)
    print(f"{len(records)} message{'s' if len(records) != 1 else ''} loaded.")
    print("Field sizes are in bytes unless otherwise noted.")
    print()

    for names, tags, bottom in records:
        analyze_record(names, tags, bottom, config)

    worst = max_encoded_size(parser)
    print(f"{'=' * 24} Summary {'=' * 24}")
    print(f"Largest possible message: {worst} bytes / {worst * 8} bits")
    print(
        f"Estimated transmission time @ {config.data_rate} bps: "
        f"{config.transmission_time(worst):.2f} seconds"
    )
    print()


def analyze_record(
    names: tuple[str, ...], tags: tuple[int, ...], bottom: Bottom, config: LinkConfig
) -> None:
    """Print a detailed breakdown of a single record.

    Args:
        names: Alternative names selecting the record, outer-to-inner
        tags: Tag bytes selecting the record, outer-to-inner
        bottom: Record schema
        config: Link characteristics used for airtime estimates
    """
    title = ".".join(names) or bottom.name or "<root>"
    print(f"{'=' * 19} {list(tags)}: {title} {'=' * 19}")

    message_config = MessageConfig.from_bottom(bottom)
    sizes = field_sizes(bottom)
    body = sum(sizes.values())
    total = len(tags) + body

    # Size summary
    print(f"Actual maximum size of message: {total} bytes / {total * 8} bits")
    if tags:
        print(f"        tag bytes{'.' * 29}{len(tags)}")
    print(f"        body{'.' * 34}{body}")
    print()

    # Body section
    print(f"{'-' * 28} Body {'-' * 28}")
    for i, name in enumerate(message_config.order, 1):
        field_schema = message_config.fields[name]
        info = field_schema.kind.value
        if field_schema.kind is FieldKind.INTEGER:
            info += f" ({field_schema.size} bits)"
        elif field_schema.kind is FieldKind.ENUM:
            assert field_schema.values is not None
            info += f" ({len(field_schema.values)} values)"
        elif field_schema.byte_width is None:
            info += " (max)"

        field_desc = f"{i}. {name}"
        size = str(sizes[name])
        dots = "." * max(1, 54 - len(field_desc) - len(size) - len(" bytes"))
        print(f"        {field_desc}{dots}{size} bytes {info}")
    print()

    if not config.fits(total):
        print(
            f"WARNING: {title} may exceed the {config.max_frame_size}-byte frame limit "
            f"({total} bytes)"
        )
        print()
