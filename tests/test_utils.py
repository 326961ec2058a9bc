"""Helper tests."""

from cucumber_junit.utils import deep_merge, load_json, load_yaml


class TestDeepMerge:
    def test_nested(self) -> None:
        base = {"a": 1, "d": {"x": 1, "y": 2}}
        merged = deep_merge(base, {"d": {"y": 3}, "b": 2})
        assert merged == {"a": 1, "b": 2, "d": {"x": 1, "y": 3}}
        assert base == {"a": 1, "d": {"x": 1, "y": 2}}

    def test_scalar_replaces_dict(self) -> None:
        assert deep_merge({"d": {"x": 1}}, {"d": False}) == {"d": False}


class TestLoaders:
    def test_missing_json(self, tmp_path) -> None:
        assert load_json(tmp_path / "missing.json") == {}

    def test_yaml_non_mapping(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        assert load_yaml(path) == {}

    def test_malformed_yaml(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("a: [unclosed\n")
        assert load_yaml(path) == {}

    def test_json_non_mapping(self, tmp_path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        assert load_json(path) == {}
