from pathlib import Path
from typing import Any, Dict

import yaml


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _find_project_root(start: Path) -> Path:
    """プロジェクトルートを推定して返す。

    - `src/` 配下から呼ばれることを想定し、上位に `.git` や `pyproject.toml`、`configs/` がある
      もっとも近いディレクトリを返す。
    - 見つからない場合は `start.parent.parent` をフォールバックとして返す。
    """
    cur = start.resolve()
    for parent in [cur] + list(cur.parents):
        if (
            (parent / ".git").exists()
            or (parent / "pyproject.toml").exists()
            or (parent / "configs").exists()
        ):
            return parent
    # 典型: <repo>/src/util/utils.py -> <repo>
    return cur.parent.parent


def load_config(root: Path | None = None) -> Dict[str, Any]:
    """構成を読み込んで辞書で返す（フェイルソフト）。

    優先順:
    1) `configs/default.yaml`（ベース）
    2) ルート `config.yaml`（ベースに上書き）

    - いずれも存在しない/不正な場合は空辞書を返す。
    - ネストした辞書のディープマージは行わず、トップレベルのみ上書き。
    """
    project_root = root if root is not None else _find_project_root(Path(__file__).parent)
    base: Dict[str, Any] = {}

    default_path = project_root / "configs" / "default.yaml"
    if default_path.exists():
        base.update(_safe_load_yaml(default_path))

    root_config_path = project_root / "config.yaml"
    if root_config_path.exists():
        base.update(_safe_load_yaml(root_config_path))

    return base


def resolve_fps(requested_fps: int | None, cfg: Dict[str, Any] | None = None) -> int:
    """更新レートを解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（<=0 は `ValueError`）。
    - 次に `clock_runner.fps`（YAML）、最後に `PXC_CLOCK_FPS`（`common.settings`）。
    """
    if requested_fps is not None:
        v = int(requested_fps)
        if v <= 0:
            raise ValueError(f"fps must be > 0, got {requested_fps}")
        return v
    runner_cfg = (cfg or {}).get("clock_runner", {})
    if isinstance(runner_cfg, dict) and "fps" in runner_cfg:
        try:
            return max(1, int(runner_cfg["fps"]))
        except (TypeError, ValueError):
            pass
    from common import settings

    return max(1, settings.get().CLOCK_FPS)
