import logging
import math
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from gridlayout.exceptions import InvalidTrackSizeError
from gridlayout.model.enums import TrackSizeType

logger = logging.getLogger(__name__)

_TRACK_SIZE_RE = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)(px|%|fr)$", re.IGNORECASE)
_TRACK_LIST_TOKEN_RE = re.compile(r"\[([^\[\]]*)\]|([^\s\[\]]+)")

TrackIdentifier = Union[int, str]


@dataclass(frozen=True)
class TrackSize:
    size_type: TrackSizeType
    amount: float = 0

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, (int, float)) or math.isnan(self.amount):
            raise InvalidTrackSizeError(
                f"track size amount must be a number; amount: {self.amount!r}",
                details={"size_type": self.size_type.value, "amount": self.amount},
            )
        if self.size_type == TrackSizeType.FRACTION:
            if self.amount <= 0:
                raise InvalidTrackSizeError(
                    f"fraction track size must be greater than 0; amount: {self.amount}",
                    details={"size_type": self.size_type.value, "amount": self.amount},
                )
        elif self.amount < 0:
            raise InvalidTrackSizeError(
                f"{self.size_type.name.lower()} track size must be 0 or larger; amount: {self.amount}",
                details={"size_type": self.size_type.value, "amount": self.amount},
            )

    def as_string(self) -> str:
        return f"{math.floor(self.amount)}{self.size_type.value}"

    @classmethod
    def parse(cls, token: str) -> 'TrackSize':
        """Read a single track-size token such as ``200px``, ``25%`` or ``1.5fr``."""
        match = _TRACK_SIZE_RE.match(token.strip())
        if match is None:
            raise InvalidTrackSizeError(
                f"unsupported track size; expected <amount>px, <amount>% or <amount>fr; token: \"{token}\"",
                details={"token": token},
            )
        number, unit = match.groups()
        amount = float(number) if "." in number else int(number)
        return cls(TrackSizeType(unit.lower()), amount)


@dataclass(frozen=True)
class LineNames:
    """Names of a grid line, rendered in CSS as ``[name1 name2 ... nameN]``."""
    names: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "names", tuple(self.names))

    def __bool__(self) -> bool:
        return len(self.names) > 0

    def __contains__(self, name: str) -> bool:
        return name in self.names

    def as_string(self) -> str:
        return f"[{' '.join(self.names)}]" if self.names else ""


@dataclass(frozen=True)
class GridTrack:
    """A track and the names of the grid line to the left of (or above) it."""
    size: TrackSize
    line_names: Optional[LineNames] = None

    def as_string(self) -> str:
        names = self.line_names.as_string() if self.line_names else ""
        return f"{names} {self.size.as_string()}" if names else self.size.as_string()


def with_pixels(pixels: float) -> TrackSize:
    return TrackSize(TrackSizeType.PIXEL, pixels)


def with_percentage(percentage: float) -> TrackSize:
    return TrackSize(TrackSizeType.PERCENTAGE, percentage)


def with_fraction(fraction: float) -> TrackSize:
    return TrackSize(TrackSizeType.FRACTION, fraction)


def with_line_names(*names: str) -> LineNames:
    return LineNames(names)


def with_grid_track(size: TrackSize, *names: str) -> GridTrack:
    return GridTrack(size, LineNames(names) if names else None)


@dataclass(frozen=True)
class TrackTemplate:
    """
    A grid-template-rows or grid-template-columns value: the ordered track list
    and the names of the last grid line.
    """
    tracks: Tuple[GridTrack, ...] = field(default_factory=tuple)
    last_line_names: Optional[LineNames] = None

    def __post_init__(self):
        object.__setattr__(self, "tracks", tuple(self.tracks))

    def __len__(self) -> int:
        return len(self.tracks)

    def as_string(self) -> str:
        """Render the template as a CSS track list, e.g. ``[nav] 200px 1fr 1fr [end]``."""
        parts = [track.as_string() for track in self.tracks]
        if self.last_line_names:
            parts.append(self.last_line_names.as_string())
        return " ".join(parts)

    def track_sizes(self, container_size: float, gap: float = 0) -> List[float]:
        """
        Calculates the size of every track for the given container dimension.

        Pixel tracks keep their amount, percentage tracks take the floored share
        of the container, and the space left after those and the gaps is
        apportioned to the fraction tracks by weight. When nothing is left the
        fraction tracks collapse to 0. Gaps are not subtracted from individual
        tracks here; that happens in cell_dimension_for.
        """
        # Fraction tracks are held as negative weights until apportioned
        dimensions: List[float] = []
        for track in self.tracks:
            size = track.size
            if size.size_type == TrackSizeType.PIXEL:
                dimensions.append(size.amount)
            elif size.size_type == TrackSizeType.PERCENTAGE:
                dimensions.append(math.floor(container_size * size.amount / 100))
            else:
                dimensions.append(-size.amount)

        total_gaps = (len(dimensions) - 1) * gap if len(dimensions) > 1 else 0
        used_space = total_gaps + sum(size for size in dimensions if size > 0)

        if used_space >= container_size:
            if any(size < 0 for size in dimensions):
                logger.debug(
                    "No space left for fraction tracks; used space: %s, container size: %s",
                    used_space, container_size
                )
            return [0 if size < 0 else size for size in dimensions]

        total_fraction = sum(-size for size in dimensions if size < 0)
        remaining = container_size - used_space
        return [(-size / total_fraction) * remaining if size < 0 else size for size in dimensions]

    def track_offsets(self, container_size: float, gap: float = 0) -> List[float]:
        """Start coordinate of each track, counting the gaps before it."""
        offsets = []
        position = 0
        for size in self.track_sizes(container_size, gap):
            offsets.append(position)
            position += size + gap
        return offsets

    @classmethod
    def parse(cls, text: str) -> 'TrackTemplate':
        """Read a CSS track list (as produced by as_string) back into a template."""
        text = text or ""
        tracks: List[GridTrack] = []
        pending: List[str] = []
        position = 0
        for match in _TRACK_LIST_TOKEN_RE.finditer(text):
            _check_skipped(text, position, match.start())
            position = match.end()
            names, token = match.groups()
            if names is not None:
                pending.extend(names.split())
                continue
            tracks.append(GridTrack(TrackSize.parse(token), LineNames(pending) if pending else None))
            pending = []
        _check_skipped(text, position, len(text))
        return cls(tuple(tracks), LineNames(pending) if pending else None)


def _check_skipped(text: str, start: int, end: int):
    # Only whitespace may sit between tokens; anything else is an unbalanced bracket
    skipped = text[start:end].strip()
    if skipped:
        raise InvalidTrackSizeError(
            f"unbalanced bracket in track list; found: \"{skipped}\"; text: \"{text}\"",
            details={"text": text, "position": start + text[start:end].index(skipped[0])},
        )


def empty_track_template() -> TrackTemplate:
    return TrackTemplate()


class TrackTemplateBuilder:
    """
    Builds a TrackTemplate. Each call returns a new builder holding the updated
    track list, so earlier handles in a chain are never changed.
    """

    def __init__(self, tracks: Iterable[GridTrack] = ()):
        self._tracks: Tuple[GridTrack, ...] = tuple(tracks)

    @property
    def template(self) -> TrackTemplate:
        return TrackTemplate(self._tracks)

    def add_track(self, size: TrackSize, line_names: Optional[LineNames] = None) -> 'TrackTemplateBuilder':
        """Adds a track and the names of the grid line to its left."""
        return TrackTemplateBuilder(self._tracks + (GridTrack(size, line_names),))

    def repeat_for(self, times: int, *tracks: GridTrack) -> 'TrackTemplateBuilder':
        """Appends the track pattern the given number of times."""
        if times < 0:
            raise InvalidTrackSizeError(
                f"repeat count must be 0 or larger; times: {times}",
                details={"times": times},
            )
        return TrackTemplateBuilder(self._tracks + tuple(tracks) * times)

    def build(self, last_line_names: Optional[LineNames] = None) -> TrackTemplate:
        return TrackTemplate(self._tracks, last_line_names)


def grid_track_template_builder() -> TrackTemplateBuilder:
    return TrackTemplateBuilder()


def track_index_for(identifier: TrackIdentifier, template: TrackTemplate) -> Optional[int]:
    """
    Resolves a row or column identifier to its 1-based track index.

    Numbers are returned unchanged. Names resolve to the first track whose line
    names contain them; None when no track has the name.
    """
    if not isinstance(identifier, str):
        return identifier
    for index, track in enumerate(template.tracks, start=1):
        if track.line_names and identifier in track.line_names:
            return index
    return None


def grid_line_names_for(template: TrackTemplate) -> List[str]:
    names = {}
    for track in template.tracks:
        if track.line_names:
            names.update(dict.fromkeys(track.line_names.names))
    return list(names)


def cell_dimension_for(container_size: float, index: int, gap: float, spanned: int, template: TrackTemplate) -> int:
    """
    Calculates the width or height of a cell's content from the track sizes.

    Args:
        container_size: The width (columns) or height (rows) of the container
        index: The 1-based row or column of the cell
        gap: The row or column gap
        spanned: The number of tracks the cell spans
        template: The row or column track template

    Returns:
        The floored dimension: the spanned track sizes plus the gaps inside the span.
    """
    start = index - 1
    spanned_size = sum(template.track_sizes(container_size, gap)[start:start + spanned])
    return math.floor(spanned_size + (spanned - 1) * gap)
