import json
from pathlib import Path

import pytest
import yaml

from endpoint_examples.parser.postman import flatten, load_collection, parse_postman

FIXTURES = Path(__file__).parent / "fixtures"


def _leaf(name, method="GET", url="https://x/api/items"):
    return {"name": name, "request": {"method": method, "url": {"raw": url}}}


def _folder(name, items):
    return {"name": name, "item": items}


def _count_leaves(items):
    total = 0
    for item in items:
        if item.get("request"):
            total += 1
        elif isinstance(item.get("item"), list):
            total += _count_leaves(item["item"])
    return total


class TestFlatten:
    def test_empty_and_none(self):
        assert flatten([]) == []
        assert flatten(None) == []

    def test_folder_groups(self):
        tree = [_folder("Reports", [_leaf("A"), _folder("B", [_leaf("C")])])]
        endpoints = flatten(tree)
        assert [(e.name, e.group) for e in endpoints] == [
            ("A", "Reports"),
            ("C", "Reports / B"),
        ]

    def test_top_level_leaf_has_empty_group(self):
        assert flatten([_leaf("Ping")])[0].group == ""

    def test_unnamed_folder_contributes_empty_segment(self):
        tree = [{"item": [_folder("Inner", [_leaf("X")])]}]
        assert flatten(tree)[0].group == " / Inner"

    def test_malformed_nodes_are_skipped(self):
        tree = [
            {"name": "note"},
            "junk",
            {"name": "empty request", "request": None},
            {"name": "bad folder", "item": "not a list"},
            _leaf("Kept"),
        ]
        assert [e.name for e in flatten(tree)] == ["Kept"]

    def test_empty_request_is_still_a_leaf(self):
        tree = [{"name": "bare", "request": {}}, {"name": "list", "request": []}]
        endpoints = flatten(tree)
        assert [(e.name, e.method, e.url_raw) for e in endpoints] == [
            ("bare", "GET", ""),
            ("list", "GET", ""),
        ]

    def test_preorder_depth_first(self):
        tree = [
            _leaf("1"),
            _folder("F", [_leaf("2"), _folder("G", [_leaf("3"), _leaf("4")]), _leaf("5")]),
            _leaf("6"),
        ]
        assert [e.name for e in flatten(tree)] == ["1", "2", "3", "4", "5", "6"]

    def test_count_matches_leaves_at_any_depth(self):
        tree = [_leaf("top")]
        node = tree
        for depth in range(30):
            folder = _folder(f"level{depth}", [_leaf(f"leaf{depth}")])
            node.append(folder)
            node = folder["item"]
        endpoints = flatten(tree)
        assert len(endpoints) == _count_leaves(tree) == 31
        assert endpoints[-1].group.count(" / ") == 29

    def test_is_pure(self):
        tree = [_folder("Reports", [_leaf("A")])]
        snapshot = json.dumps(tree)
        assert flatten(tree) == flatten(tree)
        assert json.dumps(tree) == snapshot


class TestLoadCollection:
    def test_load_json(self):
        collection = load_collection(FIXTURES / "sample.postman.json")
        assert collection["info"]["name"] == "Membership API"

    def test_load_yaml(self):
        collection = load_collection(FIXTURES / "sample.postman.yaml")
        assert collection["info"]["name"] == "Unions API"

    def test_malformed_json_raises(self, tmp_path):
        f = tmp_path / "broken.json"
        f.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_collection(f)

    def test_malformed_yaml_raises(self, tmp_path):
        f = tmp_path / "broken.yaml"
        f.write_text("item: [unclosed", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_collection(f)

    def test_non_mapping_top_level_raises(self, tmp_path):
        f = tmp_path / "list.json"
        f.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_collection(f)


class TestPostmanParser:
    def test_parse_endpoints_count(self):
        endpoints = parse_postman(FIXTURES / "sample.postman.json")
        assert len(endpoints) == 7

    def test_parse_order_and_groups(self):
        endpoints = parse_postman(FIXTURES / "sample.postman.json")
        assert [(e.name, e.group) for e in endpoints] == [
            ("Login", "Auth"),
            ("List members", "Members"),
            ("Get member", "Members"),
            ("Archive member", "Members"),
            ("Members summary", "Reports"),
            ("Save report", "Reports / Cache"),
            ("Create union", ""),
        ]

    def test_parse_headers_and_body(self):
        endpoints = parse_postman(FIXTURES / "sample.postman.json")
        login = endpoints[0]
        assert login.method == "POST"
        assert login.headers == {"Content-Type": "application/json"}
        assert login.parsed_body == {"username": "admin", "password": "secret"}

    def test_parse_yaml_collection(self):
        endpoints = parse_postman(FIXTURES / "sample.postman.yaml")
        assert [(e.method, e.url_raw) for e in endpoints] == [
            ("PUT", "https://x/api/unions/7"),
            ("DELETE", "https://x/api/unions/7"),
        ]
        assert endpoints[0].group == "Unions"

    def test_collection_without_items(self, tmp_path):
        f = tmp_path / "empty.json"
        f.write_text('{"info": {"name": "Empty"}}', encoding="utf-8")
        assert parse_postman(f) == []
