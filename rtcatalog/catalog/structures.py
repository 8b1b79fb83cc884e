"""Supported-structure handling: "Model: Structure" grouping and OAR/GTV/elective classification."""

from __future__ import annotations

import re
from typing import Any, Iterable

from rtcatalog.schemas.models import (
    NamedStructure,
    ParsedStructures,
    PlainLabel,
    StructureGroup,
    StructureTypeCounts,
    to_structure_entry,
)


def structure_label(entry: Any) -> str:
    """Display string for a raw value or a tagged structure entry."""
    match to_structure_entry(entry):
        case NamedStructure(name=name):
            return name
        case PlainLabel(label=label):
            return label


def parse_and_group_structures(entries: Iterable[Any]) -> ParsedStructures:
    """
    Group structure labels by their "Model:" prefix.

    "Head & Neck-CT: Brainstem" lands in group "Head & Neck-CT" as "Brainstem".
    Labels without a usable colon go to ``ungrouped``. A label whose remainder
    repeats the prefix ("Brain: Brain") is treated as ungrouped. Repeated
    structures within a group collapse; everything is sorted.
    """
    groups: dict[str, set[str]] = {}
    ungrouped: list[str] = []

    for entry in entries:
        label = structure_label(entry)
        if not label or not label.strip():
            continue

        colon = label.find(":")
        if 0 < colon < len(label) - 1:
            prefix = label[:colon].strip()
            rest = label[colon + 1:].strip()
            if rest and not rest.startswith(prefix):
                groups.setdefault(prefix, set()).add(rest)
            else:
                ungrouped.append(label)
        else:
            ungrouped.append(label)

    return ParsedStructures(
        groups=[
            StructureGroup(model_name=name, structures=sorted(members))
            for name, members in sorted(groups.items())
        ],
        ungrouped=sorted(ungrouped),
    )


def format_grouped_structures(
    parsed: ParsedStructures,
    max_structures_per_group: int = 8,
    max_groups: int = 4,
) -> str:
    """Plain-text rendering with "and N more" truncation."""
    blocks: list[str] = []
    for group in parsed.groups[:max_groups]:
        shown = ", ".join(group.structures[:max_structures_per_group])
        hidden = len(group.structures) - max_structures_per_group
        line = f"  • {shown}" + (f", and {hidden} more" if hidden > 0 else "")
        blocks.append(f"{group.model_name}:\n{line}")

    text = "\n\n".join(blocks)
    if len(parsed.groups) > max_groups:
        text += f"\n\n... and {len(parsed.groups) - max_groups} more model(s)"

    if parsed.ungrouped:
        shown = ", ".join(parsed.ungrouped[:max_structures_per_group])
        hidden = len(parsed.ungrouped) - max_structures_per_group
        other = "Other Structures:\n  • " + shown + (f", and {hidden} more" if hidden > 0 else "")
        text = f"{text}\n\n{other}" if text else other
    return text


# ── Structure type classification ────────────────────────────────────────

_LATERALITY_RE = re.compile(
    r"\(L/R\)|\(R/L\)|\sL/R\s|\sR/L\s|\(L\)|\(R\)|\sL\s|\sR\s"
)

_GTV_PATTERNS = [
    re.compile(r"\bGTV\b|Gross\s+Tumor|Gross\s+Target", re.I),
    re.compile(r"\blesions?\b|\blesional\b", re.I),
]

_ELECTIVE_PATTERNS = [
    re.compile(r"\b(CTV|PTV|Clinical\s+Target|Planning\s+Target|Elective)\b", re.I),
    re.compile(r"\bLN[_\s\-]|\bLN\b|^LN_|LN_ESTRO|\bESTRO_LN", re.I),
    re.compile(r"\b(Lymph\s*Node|Nodal|Ax_L|IMN)\b", re.I),
    re.compile(r"[-_](LN|IMN|Ax|Node)s?(\s|$|\()", re.I),
    re.compile(r"\bLN[-_\s]?\d*\b", re.I),
    re.compile(r"\bNodes?\b", re.I),
    re.compile(
        r"(Axillary|Internal\s+Mammary|Mediastinal|Cervical|Supraclavicular|Infraclavicular)"
        r"\s+(Node|LN)",
        re.I,
    ),
    re.compile(r"Level\s+[IV]+\s+(LN|Node)", re.I),
]


def has_laterality_pattern(structure: str) -> bool:
    """True for paired structures written as "(L/R)", "(L)", " R " and similar."""
    return bool(_LATERALITY_RE.search(structure))


def classify_structure(structure: str) -> dict[str, bool]:
    """Return {"is_gtv", "is_elective"}; anything that is neither is an organ at risk."""
    return {
        "is_gtv": any(p.search(structure) for p in _GTV_PATTERNS),
        "is_elective": any(p.search(structure) for p in _ELECTIVE_PATTERNS),
    }


def count_structure_types(structures: Iterable[Any]) -> StructureTypeCounts:
    """Count OARs, GTVs and elective volumes; lateral pairs count twice."""
    counts = StructureTypeCounts()
    for entry in structures:
        name = structure_label(entry)
        if not name.strip():
            continue
        kind = classify_structure(name)
        weight = 2 if has_laterality_pattern(name) else 1
        if kind["is_gtv"]:
            counts.gtv += weight
        elif kind["is_elective"]:
            counts.elective += weight
        else:
            counts.oars += weight
        counts.total += weight
    return counts
