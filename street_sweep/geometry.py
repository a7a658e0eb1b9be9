from __future__ import annotations
from typing import Optional, Sequence, Tuple

from .models import LEFT, RIGHT, Point


def project_on_segment(a: Point, b: Point, p: Point) -> Tuple[float, float, float]:
    """点到有限线段的最近点（投影参数截断到 [0, 1]），返回 (cx, cy, 距离平方)。"""
    ax, ay = a
    bx, by = b
    dx, dy = bx - ax, by - ay
    seg_len2 = dx * dx + dy * dy
    t = ((p[0] - ax) * dx + (p[1] - ay) * dy) / seg_len2 if seg_len2 > 0 else 0.0
    t = max(0.0, min(1.0, t))
    cx, cy = ax + dx * t, ay + dy * t
    vx, vy = p[0] - cx, p[1] - cy
    return cx, cy, vx * vx + vy * vy


def closest_point(line: Sequence[Point], lon: float, lat: float) -> Optional[Tuple[int, float, float, float]]:
    """返回最近线段下标、最近点坐标与距离平方；不足两个顶点时返回 None。"""
    if not line or len(line) < 2:
        return None
    best = None
    for i in range(len(line) - 1):
        cx, cy, d2 = project_on_segment(line[i], line[i + 1], (lon, lat))
        # 严格小于：距离相同时保留较早的线段
        if best is None or d2 < best[3]:
            best = (i, cx, cy, d2)
    return best


def side_of_line(line: Sequence[Point], lon: float, lat: float) -> Optional[str]:
    """判断点位于有向折线的左侧还是右侧。
    方向以折线顶点的存储顺序为准，与数据集 cnnrightleft 的 L/R 约定一致。
    叉积为正 -> left，为负 -> right，恰好在线上 -> None。"""
    best = closest_point(line, lon, lat)
    if best is None:
        return None
    i, cx, cy, _ = best
    (ax, ay), (bx, by) = line[i], line[i + 1]
    seg_dx, seg_dy = bx - ax, by - ay
    vx, vy = lon - cx, lat - cy
    cross = seg_dx * vy - seg_dy * vx
    if cross > 0:
        return LEFT
    if cross < 0:
        return RIGHT
    return None
