"""Shared helpers: IRI formatting, colours and timing."""

from __future__ import annotations

import functools
import inspect
import logging
import time
from typing import Any, Dict, Tuple

from ldexplorer.config import NAMESPACE_PREFIXES

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")


def _hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        raise ValueError(f"Invalid hex color: {hex_color}")
    return tuple(int(hex_color[i : i + 2], 16) for i in (0, 2, 4))


def _rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def _blend_hex(color: str, target: str, ratio: float) -> str:
    ratio = max(0.0, min(1.0, ratio))
    r1, g1, b1 = _hex_to_rgb(color)
    r2, g2, b2 = _hex_to_rgb(target)
    return _rgb_to_hex(
        (round(r1 + (r2 - r1) * ratio), round(g1 + (g2 - g1) * ratio), round(b1 + (b2 - b1) * ratio))
    )


def _make_node_color(base: str) -> Dict[str, Any]:
    return {
        "background": base,
        "border": _blend_hex(base, "#1F2A37", 0.35),
        "highlight": {
            "background": _blend_hex(base, "#FFFFFF", 0.18),
            "border": _blend_hex(base, "#0F172A", 0.45),
        },
    }


def _make_edge_color(base: str) -> Dict[str, Any]:
    return {
        "color": base,
        "highlight": _blend_hex(base, "#FFFFFF", 0.15),
        "opacity": 0.78,
    }


def _relative_luminance(hex_color: str) -> float:
    def channel(value: int) -> float:
        c = value / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = _hex_to_rgb(hex_color)
    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def _contrast_ratio(lum_a: float, lum_b: float) -> float:
    lighter, darker = max(lum_a, lum_b), min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)


def _pick_label_color(bg_hex: str, dark: str = "#0B0B0B", light: str = "#F8F6F1") -> str:
    try:
        lum_bg = _relative_luminance(bg_hex)
        lum_dark = _relative_luminance(dark)
        lum_light = _relative_luminance(light)
    except ValueError:
        return dark
    contrast_dark = _contrast_ratio(lum_bg, lum_dark)
    contrast_light = _contrast_ratio(lum_bg, lum_light)
    return dark if contrast_dark >= contrast_light else light


def _local_name(iri: str) -> str:
    """Last segment of an IRI or CURIE, after the final `#`, `/` or prefix colon."""
    if not isinstance(iri, str) or not iri.strip():
        return "Unknown"
    text = iri.strip()
    if text.startswith(("http://", "https://")):
        text = text.rstrip("/#")
        sep = "#" if "#" in text else "/"
        text = text.rpartition(sep)[2]
    else:
        text = text.partition(":")[2] or text
    return text or "Unknown"


def _shorten_iri(iri: str, max_len: int = 80) -> str:
    """Prefixed name for known namespaces, otherwise the IRI clipped to `max_len`."""
    if not isinstance(iri, str):
        return str(iri)
    for ns, prefix in NAMESPACE_PREFIXES.items():
        if iri.startswith(ns):
            return f"{prefix}:{iri[len(ns):]}"
    if len(iri) <= max_len:
        return iri
    local = _local_name(iri)
    # "local (head...)" adds six characters around the clipped head
    room = max_len - len(local) - 6
    if local == "Unknown" or room < 5:
        return iri[: max_len - 3] + "..."
    return f"{local} ({iri[:room]}...)"


def profile_time(func):
    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time.time()
            result = await func(*args, **kwargs)
            elapsed = time.time() - start_time
            logging.info("[PROFILE] Function '%s' executed in %.3f seconds", func.__name__, elapsed)
            return result

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        elapsed = time.time() - start_time
        logging.info("[PROFILE] Function '%s' executed in %.3f seconds", func.__name__, elapsed)
        return result

    return wrapper
