from .cat import CatDto, CatRequest

__all__ = ["CatDto", "CatRequest"]
