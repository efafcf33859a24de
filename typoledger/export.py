"""Espanso YAML export of the active-correction set."""

import os
import sys
from collections.abc import Iterable

import yaml
from loguru import logger

from typoledger.core.types import ActiveCorrection


def correction_to_yaml_dict(correction: ActiveCorrection) -> dict:
    """Convert an active correction to an Espanso match dict.

    Rules are whole-word matches; Espanso's propagate_case re-applies the
    typed capitalization, as the ledger does when a folded rule fires.
    """
    return {
        "trigger": correction.misspelling,
        "replace": correction.corrected,
        "propagate_case": True,
        "word": True,
    }


def export_espanso(corrections: Iterable[ActiveCorrection], output: str | None) -> int:
    """Write active corrections as an Espanso match file.

    Args:
        corrections: Active corrections to export
        output: Output file path (None = stdout)

    Returns:
        Number of matches written
    """
    sorted_corrections = sorted(corrections, key=lambda c: (c.corrected, c.misspelling))
    yaml_output = {"matches": [correction_to_yaml_dict(c) for c in sorted_corrections]}
    dump_kwargs = {
        "allow_unicode": True,
        "default_flow_style": False,
        "sort_keys": False,
        "width": float("inf"),
    }

    if output is None:
        yaml.safe_dump(yaml_output, sys.stdout, **dump_kwargs)
    else:
        output = os.path.expanduser(output)
        parent = os.path.dirname(output)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            yaml.safe_dump(yaml_output, f, **dump_kwargs)
        logger.info(f"Wrote {len(sorted_corrections)} corrections to {output}")

    return len(sorted_corrections)
