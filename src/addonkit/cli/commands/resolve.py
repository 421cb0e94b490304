from __future__ import annotations

import argparse
from pathlib import Path

from addonkit.cli._args import add_standard_flags
from addonkit.cli._output import OutputFormatter
from addonkit.core.config import AddonkitSettings
from addonkit.core.presets import PreviewAnnotation, VirtualAddon, resolve_addon_name
from addonkit.core.resolution import ResolutionAdapter


SUMMARY = "Explain how an addon specifier resolves"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    parser.add_argument("specifier", help="Addon specifier (e.g. some-addon or some-addon/manager)")


def main(args: argparse.Namespace) -> int:
    config_dir = Path(args.config_dir).resolve() if args.config_dir else Path.cwd()
    adapter = ResolutionAdapter(settings=AddonkitSettings.load(config_dir))
    out = OutputFormatter(json_mode=args.json)

    resolved = resolve_addon_name(config_dir, args.specifier, adapter=adapter)
    if resolved is None:
        if args.json:
            out.json_output({"specifier": args.specifier, "resolved": None})
        else:
            out.text(f'Could not resolve addon "{args.specifier}" from {config_dir}')
        return 1

    if args.json:
        out.json_output({"specifier": args.specifier, "resolved": resolved.to_dict()})
        return 0

    out.text(f"{args.specifier} -> {resolved.kind}")
    if isinstance(resolved, VirtualAddon):
        for entry in resolved.manager_entries:
            out.text(f"- manager: {entry}")
        for preview in resolved.preview_annotations:
            if isinstance(preview, PreviewAnnotation):
                out.text(f"- preview: {preview.bare} ({preview.absolute})")
            else:
                out.text(f"- preview: {preview}")
        for preset in resolved.presets:
            out.text(f"- preset: {preset['name']}")
    else:
        out.text(f"- preset: {resolved.name}")
    return 0
