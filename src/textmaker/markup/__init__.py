from .parser import parse, parse_inline

__all__ = ["parse", "parse_inline"]
