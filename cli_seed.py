from __future__ import annotations
from pathlib import Path

from street_sweep.snapshot import write_snapshot
from street_sweep.simulate import seed_snapshot

"""
离线快照初始化脚本：生成样例地址与清扫日程后写入 Excel 工作簿，便于在没有网络时复现查询结果。
1) 生成 3 条 avenue × 4 个街区 × 左右两侧的日程，以及对应的地址点；
2) 写入 data/snapshot.xlsx（addresses / schedules 两个工作表）；
3) 提示如何让服务改用快照（SWEEP_SNAPSHOT_PATH）。
"""

def main():
    root = Path(__file__).resolve().parent
    out_path = root / "data" / "snapshot.xlsx"

    addresses, schedules = seed_snapshot(n_blocks=4, seed=7)
    write_snapshot(out_path, addresses, schedules)

    print(f"Snapshot written: {out_path}")
    print(f"Addresses: {len(addresses)}")
    print(f"Schedules: {len(schedules)}")
    print(f"Next: SWEEP_SNAPSHOT_PATH={out_path} python cli_lookup.py \"301 25TH AVE\"")

if __name__ == "__main__":
    main()
