"""
Filter registry and filter-chain parsing.

A chain is written the way routes declare their filters::

    crop(800, 600, north) -> overlayImage("logo.png", 0.6, SE, 0, 10, 10, 0)

Arguments are double-quoted strings, integers, floats, or bare words which
are passed on as strings. Compiling a chain builds every operation up front,
so any construction error keeps the chain from being used at all.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple
from skrop.core.errors import FilterSyntaxError
from skrop.core.interfaces import IImageOperation, IOperationFactory
from skrop.features.crop import CropOperation
from skrop.features.overlay import OverlayImageOperation
from skrop.features.resize import ResizeOperation
from skrop.kernel.system.logging import get_logger

logger = get_logger(__name__)

_WS = re.compile(r"\s*")
_NAME = re.compile(r"[A-Za-z_]\w*")
_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')
_NUMBER = re.compile(r"[-+]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?(?![\w.])")
_WORD = re.compile(r"[^\s,()\"]+")
_ESCAPE = re.compile(r"\\(.)")


class FilterRegistry:
    """
    Maps filter names to operation classes.
    """

    def __init__(self, operations: Iterable[IOperationFactory] = ()):
        self._specs: Dict[str, IOperationFactory] = {}
        for op in operations:
            self.register(op)

    def register(self, op: IOperationFactory) -> None:
        self._specs[op.name] = op

    def names(self) -> List[str]:
        return sorted(self._specs)

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    def create_filter(self, name: str, args: List[Any]) -> IImageOperation:
        spec = self._specs.get(name)
        if spec is None:
            raise FilterSyntaxError(f"Unknown filter: {name}")
        return spec.create(args)

    def compile_chain(self, text: str) -> List[IImageOperation]:
        """Parses `text` and constructs every declared operation, in order."""
        chain = [self.create_filter(name, args) for name, args in parse_filter_chain(text)]
        logger.debug(f"Compiled chain of {len(chain)} filters: {[op.name for op in chain]}")
        return chain


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def skip_ws(self) -> None:
        self.pos = _WS.match(self.text, self.pos).end()

    def at_end(self) -> bool:
        self.skip_ws()
        return self.pos >= len(self.text)

    def expect(self, literal: str) -> None:
        self.skip_ws()
        if not self.text.startswith(literal, self.pos):
            self.fail(f"expected '{literal}'")
        self.pos += len(literal)

    def accept(self, literal: str) -> bool:
        self.skip_ws()
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def fail(self, msg: str) -> None:
        raise FilterSyntaxError(f"{msg} at position {self.pos} in {self.text!r}")

    def match(self, pattern: re.Pattern) -> Optional[re.Match]:
        self.skip_ws()
        m = pattern.match(self.text, self.pos)
        if m:
            self.pos = m.end()
        return m

    def parse_arg(self) -> Any:
        m = self.match(_STRING)
        if m:
            return _ESCAPE.sub(r"\1", m.group(1))
        m = self.match(_NUMBER)
        if m:
            token = m.group(0)
            if re.fullmatch(r"[-+]?\d+", token):
                return int(token)
            return float(token)
        m = self.match(_WORD)
        if m:
            return m.group(0)
        self.fail("expected an argument")

    def parse_filter(self) -> Tuple[str, List[Any]]:
        m = self.match(_NAME)
        if not m:
            self.fail("expected a filter name")
        name = m.group(0)

        self.expect("(")
        args: List[Any] = []
        if not self.accept(")"):
            args.append(self.parse_arg())
            while self.accept(","):
                args.append(self.parse_arg())
            self.expect(")")
        return name, args

    def parse_chain(self) -> List[Tuple[str, List[Any]]]:
        filters = []
        if self.at_end():
            return filters
        filters.append(self.parse_filter())
        while self.accept("->"):
            filters.append(self.parse_filter())
        if not self.at_end():
            self.fail("unexpected trailing input")
        return filters


def parse_filter_chain(text: str) -> List[Tuple[str, List[Any]]]:
    """
    Splits a chain into (filter name, positional arguments) pairs.
    """
    return _Parser(text).parse_chain()


DEFAULT_REGISTRY = FilterRegistry([CropOperation, OverlayImageOperation, ResizeOperation])


def compile_chain(text: str) -> List[IImageOperation]:
    return DEFAULT_REGISTRY.compile_chain(text)
