"""
Tests for workspace configuration loading.
"""

import json

from depmap_core.config import CONFIG_FILENAME, DepMapConfig, load_config


class TestLanguageFor:

    def test_defaults(self):
        config = DepMapConfig()
        assert config.language_for("a.ts") == "typescript"
        assert config.language_for("b.TSX") == "typescriptreact"
        assert config.language_for("c.hpp") == "cpp"
        assert config.language_for("README.md") is None

    def test_aliases_normalized(self):
        config = DepMapConfig(language_mapping={".cxx": "C++", ".tsx": "typescript"})
        assert config.language_for("x.cxx") == "cpp"
        # React extensions keep their variant
        assert config.language_for("x.tsx") == "typescriptreact"


class TestLoadConfig:

    def test_no_file_gives_defaults(self, workspace):
        config = load_config(workspace_root=workspace)
        assert config == DepMapConfig()

    def test_camel_case_keys(self, workspace):
        (workspace / CONFIG_FILENAME).write_text(json.dumps({
            "ignorePatterns": ["dist/**"],
            "languageMapping": {"kt": "java"},
            "maxWorkers": 2,
        }))
        config = load_config(workspace_root=workspace)
        assert config.ignore_patterns == ["dist/**"]
        assert config.language_mapping == {".kt": "java"}
        assert config.max_workers == 2

    def test_snake_case_keys(self, workspace):
        path = workspace / "custom.json"
        path.write_text(json.dumps({"ignore_patterns": ["*.gen.ts"]}))
        assert load_config(path).ignore_patterns == ["*.gen.ts"]

    def test_invalid_json_falls_back(self, workspace):
        (workspace / CONFIG_FILENAME).write_text("{ not json")
        assert load_config(workspace_root=workspace) == DepMapConfig()

    def test_wrong_root_type_falls_back(self, workspace):
        (workspace / CONFIG_FILENAME).write_text("[1, 2, 3]")
        assert load_config(workspace_root=workspace) == DepMapConfig()

    def test_worker_floor(self):
        assert DepMapConfig.from_dict({"maxWorkers": 0}).max_workers == 1
