from .image import generate_og_image, rasterize
from .template import OgData, OgLayout, build_layout, coerce_date, format_og_date

__all__ = [
    "OgData",
    "OgLayout",
    "build_layout",
    "coerce_date",
    "format_og_date",
    "generate_og_image",
    "rasterize",
]
