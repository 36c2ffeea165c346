"""
core/constants.py 테스트
"""

import re
from pathlib import Path

from core.constants import PERIOD_PATTERN, PROJECT_ROOT, Defaults, Paths


class TestPaths:
    """경로 상수 테스트"""

    def test_all_paths_are_path_objects(self) -> None:
        """모든 경로가 pathlib.Path"""
        for name in ("CONFIG_DIR", "DATA_DIR", "LOGS_DIR", "SETTINGS_FILE", "PROD_DB", "DEV_DB"):
            assert isinstance(getattr(Paths, name), Path)

    def test_under_project_root(self) -> None:
        assert Paths.DATA_DIR.parent == PROJECT_ROOT
        assert Paths.SETTINGS_FILE.parent == Paths.CONFIG_DIR

    def test_db_files_differ_by_mode(self) -> None:
        assert Paths.PROD_DB != Paths.DEV_DB


class TestDefaults:
    def test_fallback_names(self) -> None:
        assert Defaults.MEMBER_NAME_FALLBACK
        assert Defaults.SYSTEM_ADMIN_NAME


class TestPeriodPattern:
    def test_pattern(self) -> None:
        pattern = re.compile(PERIOD_PATTERN)

        assert pattern.match("2024-01")
        assert pattern.match("2024-12")
        assert not pattern.match("2024-00")
        assert not pattern.match("2024-1")
        assert not pattern.match("24-01")
