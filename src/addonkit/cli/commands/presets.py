from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, Dict, List

from addonkit.cli._args import add_standard_flags
from addonkit.cli._output import OutputFormatter
from addonkit.core.config import AddonkitSettings
from addonkit.core.presets import PreviewAnnotation, load_all_presets


SUMMARY = "Load presets and show what they contribute"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    parser.add_argument("specifiers", nargs="+", help="Preset or addon specifiers, in order")
    parser.add_argument(
        "--extension",
        help="Fold one extension point and print its value instead of the summary",
    )


def _preview_payload(entry: Any) -> Any:
    return entry.to_dict() if isinstance(entry, PreviewAnnotation) else entry


async def _collect(args: argparse.Namespace, config_dir: Path) -> Dict[str, Any]:
    presets = await load_all_presets(
        {"config_dir": str(config_dir)},
        core_presets=list(args.specifiers),
        settings=AddonkitSettings.load(config_dir),
    )
    if args.extension:
        return {"extension": args.extension, "value": await presets.apply(args.extension)}

    loaded: List[Dict[str, Any]] = [
        {
            "name": preset.name,
            "extensions": sorted(preset.preset.keys()),
            "options": dict(preset.options),
        }
        for preset in presets.loaded
    ]
    return {
        "loaded": loaded,
        "manager_entries": await presets.manager_entries(),
        "preview_annotations": [_preview_payload(p) for p in await presets.preview_annotations()],
    }


def main(args: argparse.Namespace) -> int:
    config_dir = Path(args.config_dir).resolve() if args.config_dir else Path.cwd()
    out = OutputFormatter(json_mode=args.json)
    payload = asyncio.run(_collect(args, config_dir))

    if args.json:
        out.json_output(payload)
        return 0

    if args.extension:
        out.text(f"{args.extension}: {payload['value']!r}")
        return 0

    out.text(f"Loaded presets ({len(payload['loaded'])}):")
    for item in payload["loaded"]:
        extensions = ", ".join(item["extensions"]) or "-"
        out.text(f"- {item['name']} [{extensions}]")
    out.text("Manager entries:")
    for entry in payload["manager_entries"]:
        out.text(f"- {entry}")
    out.text("Preview annotations:")
    for entry in payload["preview_annotations"]:
        out.text(f"- {entry}")
    return 0
