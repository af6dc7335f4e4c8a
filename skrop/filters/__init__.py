from skrop.filters.registry import (
    DEFAULT_REGISTRY,
    FilterRegistry,
    compile_chain,
    parse_filter_chain,
)

__all__ = ["DEFAULT_REGISTRY", "FilterRegistry", "compile_chain", "parse_filter_chain"]
