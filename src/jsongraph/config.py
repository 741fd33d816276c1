"""Build and layout options, plus project defaults from pyproject.toml.

Reads the [tool.jsongraph] section so a project can pin its own spacing or
truncation settings once instead of passing them on every call:

    [tool.jsongraph.build]
    max_label_chars = 80

    [tool.jsongraph.layout]
    rank_sep = 200
"""

from __future__ import annotations

import dataclasses
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildOptions:
    """Options for turning a JSON value into nodes and edges.

    Attributes:
        max_label_chars: Primitive node labels longer than this are cut and
            get a trailing "..."
        recurse_empty_containers: If True, an empty object/array property
            still recurses (an empty object then becomes a node with no
            rows). If False, it is only shown inline as {0 keys}/[0 items].
    """

    max_label_chars: int = 50
    recurse_empty_containers: bool = False


@dataclass(frozen=True)
class LayoutOptions:
    """Spacing and size-estimation constants for the layout engine.

    Sizes are in content units (pixels in a browser renderer).
    """

    # Spacing (matches the dagre settings the renderer was tuned against)
    node_sep: float = 80  # vertical gap between boxes in one rank
    rank_sep: float = 150  # horizontal gap between ranks

    # Size estimation
    char_width: float = 7.5
    width_padding: float = 40
    min_width: float = 200
    max_width: float = 350
    line_height: float = 24
    height_padding: float = 30
    min_height: float = 60

    # Crossing reduction
    ordering_passes: int = 4


@dataclass(frozen=True)
class JsonGraphConfig:
    """Configuration from [tool.jsongraph] in pyproject.toml."""

    build: BuildOptions = field(default_factory=BuildOptions)
    layout: LayoutOptions = field(default_factory=LayoutOptions)


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from start directory to find pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _options_from(cls: type, section: dict[str, Any]) -> Any:
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(section) - known)
    if unknown:
        logger.warning("Ignoring unknown %s keys in pyproject.toml: %s", cls.__name__, ", ".join(unknown))
    return cls(**{k: v for k, v in section.items() if k in known})


def load_config(start: Path | None = None) -> JsonGraphConfig:
    """Load [tool.jsongraph] from the nearest pyproject.toml.

    Returns default config if no pyproject.toml or no [tool.jsongraph] section.
    """
    path = find_pyproject(start)
    if path is None:
        return JsonGraphConfig()

    if sys.version_info >= (3, 11):
        import tomllib
    else:
        try:
            import tomli as tomllib
        except ImportError:
            return JsonGraphConfig()

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get("jsongraph", {})
    if not section:
        return JsonGraphConfig()

    logger.debug("Loaded [tool.jsongraph] from %s", path)
    return JsonGraphConfig(
        build=_options_from(BuildOptions, section.get("build", {})),
        layout=_options_from(LayoutOptions, section.get("layout", {})),
    )
