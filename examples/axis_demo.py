from __future__ import annotations

from pathlib import Path

import numpy as np

from plotkit import RasterSurface, build_axis, draw_axis, line, markers, set_clip_box
from plotkit.adapters import normalize_series


def _render(out_path: Path) -> None:
    x = np.linspace(0.0, 12.0, 200, dtype=np.float64)
    y = 1.8 * np.sin(x * 0.9) + 0.3 * x
    y[90:96] = np.nan
    wave = normalize_series(y, x=x)
    samples = normalize_series(y[::20], x=x[::20])

    axis = build_axis(
        [wave, samples],
        width=900,
        height=540,
        y_data_margin=0.1,
        axis_style_title="sin(0.9x) + drift",
        axis_style_draw_box=True,
    )
    surface = RasterSurface(int(axis.width), int(axis.height))
    draw_axis(surface, axis)
    set_clip_box(surface, axis)
    line(surface, axis, wave, (200, 40, 40, 255), width=2)
    markers(surface, axis, samples, (20, 60, 160, 255), size=5)
    surface.reset_clip()
    surface.to_image().save(out_path)


def main() -> None:
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "axis_demo.png"
    _render(out_path)
    print(f"wrote {out_path}")


if __name__ == "__main__":
    main()
