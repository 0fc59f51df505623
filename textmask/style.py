"""Style projection — literal vs. placeholder styling per character."""
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence

from textmask.completion import PlaceholderPolicy
from textmask.errors import ConfigurationError
from textmask.mask import MaskModel


@dataclass(frozen=True)
class StyleConfig:
    """Rendering inputs for placeholder characters; they never affect masking."""
    mask_color: str = '#000000'
    mask_alpha: float = 0.3

    def __post_init__(self):
        if not 0.0 <= float(self.mask_alpha) <= 1.0:
            raise ConfigurationError(f"mask_alpha must be within [0, 1], got {self.mask_alpha!r}")

    def rgba(self):
        """(r, g, b, a) with a in [0, 1], parsed from a #rgb or #rrggbb color."""
        value = self.mask_color.lstrip('#')
        if len(value) == 3:
            value = ''.join(c * 2 for c in value)
        if len(value) != 6:
            raise ConfigurationError(f"unsupported color: {self.mask_color!r}")
        try:
            r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise ConfigurationError(f"unsupported color: {self.mask_color!r}") from None
        return r, g, b, float(self.mask_alpha)


class StyledChar(NamedTuple):
    char: str
    placeholder: bool


class StyleRun(NamedTuple):
    start: int
    length: int
    placeholder: bool


class StyleProjector:
    """Classifies each character of a text for the renderer.

    Holds no per-text state: project() can be called any number of times.
    """

    def __init__(self, model: MaskModel, policy=PlaceholderPolicy.POSITION,
                 config: Optional[StyleConfig] = None):
        self._model = model
        self.policy = PlaceholderPolicy.parse(policy)
        self.config = config or StyleConfig()

    def project(self, text: str, filled: Optional[Sequence[bool]] = None) -> List[StyledChar]:
        if self._model.is_empty:
            return [StyledChar(c, False) for c in text]
        if self.policy is PlaceholderPolicy.VALUE or filled is None:
            replaceable = self._model.replaceable
            return [StyledChar(c, c in replaceable) for c in text]

        mask = self._model.mask
        matcher = self._model.matcher
        result = []
        for i, c in enumerate(text):
            placeholder = (
                i < len(mask)
                and not matcher.is_delimiter(mask[i])
                and not (i < len(filled) and filled[i])
            )
            result.append(StyledChar(c, placeholder))
        return result

    def runs(self, text: str, filled: Optional[Sequence[bool]] = None) -> List[StyleRun]:
        """Consecutive equally styled characters merged into runs."""
        runs: List[StyleRun] = []
        for i, styled in enumerate(self.project(text, filled)):
            if runs and runs[-1].placeholder == styled.placeholder:
                last = runs[-1]
                runs[-1] = last._replace(length=last.length + 1)
            else:
                runs.append(StyleRun(i, 1, styled.placeholder))
        return runs
