from __future__ import annotations
import random
from typing import Any, Dict, List, Tuple


"""
街道清扫快照数据合成器
1. 生成若干条南北走向的 avenue，每条按 100 个门牌号划分街区（block），折线方向自南向北
   西侧（折线左侧）为偶数门牌，东侧（右侧）为奇数门牌；
2. 每个街区生成左右两侧各一条清扫日程，limits 交替使用门牌区间（"100 - 198"）
   与交叉街道名（"CLEMENT ST - CALIFORNIA ST"）两种写法；
3. 为每条东西走向的交叉街道生成若干地址点，供交叉街道启发式查找参考门牌号；
4. 地址点坐标带微小扰动，模拟测量误差。
"""

AVENUES = ["24TH", "25TH", "26TH"]
CROSS_STREETS = ["LAKE", "CALIFORNIA", "CLEMENT", "GEARY", "ANZA"]
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]

BASE_LON, BASE_LAT = -122.4840, 37.7750
AVE_SPACING = 0.0011  # 经度方向，约 100 米
BLOCK_SPACING = 0.0009  # 纬度方向，约 100 米
SIDE_OFFSET = 0.00008

def _ave_lon(i: int) -> float:
    return BASE_LON - i * AVE_SPACING

def _block_lat(k: int) -> float:
    return BASE_LAT + k * BLOCK_SPACING

def _weeks(rng: random.Random) -> Dict[str, str]:
    if rng.random() < 0.5:
        flags = [True] * 5
    else:
        first = rng.choice([True, False])
        flags = [first, not first, first, not first, False]
    return {f"week{i + 1}": "1" if on else "0" for i, on in enumerate(flags)}

def seed_snapshot(n_blocks: int = 4, seed: int = 7) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    rng = random.Random(seed)
    addresses: List[Dict[str, Any]] = []
    schedules: List[Dict[str, Any]] = []
    cnn_counter = 9000000

    for i, ave in enumerate(AVENUES):
        lon = _ave_lon(i)
        for k in range(n_blocks):
            cnn_counter += 100
            cnn = str(cnn_counter)
            lo, hi = (k + 1) * 100, (k + 1) * 100 + 99
            line = [[lon, _block_lat(k)], [lon, _block_lat(k + 1)]]
            south, north = CROSS_STREETS[k % len(CROSS_STREETS)], CROSS_STREETS[(k + 1) % len(CROSS_STREETS)]
            if k % 2 == 0:
                limits = f"{lo} - {hi}"
            else:
                limits = f"{south} ST - {north} ST"

            for side, code, parity in (("L", "West", 0), ("R", "East", 1)):
                sched = {
                    "cnn": cnn,
                    "corridor": f"{ave.replace('TH', 'th', 1)} Ave",
                    "limits": limits,
                    "cnnrightleft": side,
                    "blockside": code,
                    "fullname": "Street Cleaning",
                    "weekday": rng.choice(WEEKDAYS),
                    "fromhour": str(rng.choice([6, 8, 9, 12])),
                    "tohour": str(rng.choice([10, 11, 14])),
                    "line": {"type": "LineString", "coordinates": line},
                }
                sched.update(_weeks(rng))
                schedules.append(sched)

                for n in range(lo + parity, hi + 1, 40):
                    frac = (n - lo) / 100.0
                    dlon = -SIDE_OFFSET if parity == 0 else SIDE_OFFSET
                    addresses.append({
                        "address": f"{n} {ave} AVE",
                        "address_number": n,
                        "street_name": ave,
                        "street_type": "AVE",
                        "cnn": cnn,
                        "lon": lon + dlon + rng.uniform(-0.00001, 0.00001),
                        "lat": _block_lat(k) + frac * BLOCK_SPACING + rng.uniform(-0.00001, 0.00001),
                    })

    for k, street in enumerate(CROSS_STREETS):
        n = 2400 + k * 10
        addresses.append({
            "address": f"{n} {street} ST",
            "address_number": n,
            "street_name": street,
            "street_type": "ST",
            "cnn": None,
            "lon": _ave_lon(1) + AVE_SPACING / 2,
            "lat": _block_lat(k),
        })
    return addresses, schedules
