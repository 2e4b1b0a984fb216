"""EditorConfig: immutable settings of an editing session.

EditorConfig is a frozen dataclass validated on construction.  It carries
infrastructure parameters only; the grammar itself is supplied separately
to ``EditorController.start``.
"""

from __future__ import annotations

from dataclasses import dataclass

from tsformula_editor.tree.builder import DEFAULT_MAX_DEPTH


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Immutable configuration for an editing session.

    Attributes:
        base_url: URL prefix of the formula server.  The highlighting
            collaborator is reached at ``<base_url>/tsformula/pygmentize``.
            Empty means offline: formulas are shown unstyled.
        tick_interval: Seconds between render ticks.  Edits made between two
            ticks cost at most one highlighting request.
        request_timeout: Highlighting request timeout, in seconds.
        max_depth: Depth bound for default tree instantiation; exceeding it
            means the grammar is cyclic.
        cache_size: Number of highlighted texts kept in memory.  0 (the
            default) disables the cache, so every tick that finds the text
            changed reaches the collaborator.
        atom_aliases: Read capitalised spellings in the grammar (``Number``,
            ``pd.Timestamp``...) as atom value types.
    """

    base_url: str = ""
    tick_interval: float = 1.0
    request_timeout: float = 10.0
    max_depth: int = DEFAULT_MAX_DEPTH
    cache_size: int = 0
    atom_aliases: bool = False

    def __post_init__(self) -> None:
        if self.base_url and not self.base_url.startswith(("http://", "https://")):
            msg = f"base_url must be an http(s) URL, got {self.base_url!r}"
            raise ValueError(msg)
        if self.tick_interval <= 0.0:
            msg = f"tick_interval must be > 0, got {self.tick_interval}"
            raise ValueError(msg)
        if self.request_timeout <= 0.0:
            msg = f"request_timeout must be > 0, got {self.request_timeout}"
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)
        if self.cache_size < 0:
            msg = f"cache_size must be >= 0, got {self.cache_size}"
            raise ValueError(msg)
