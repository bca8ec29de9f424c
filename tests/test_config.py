"""Tests for NodeConfig and config inheritance.

Covers:
- defaults and delimiter validation
- item access over delimiter and extra options
- create_config(): fresh, aliased and destructively merged records
- siblings sharing one config observe each other's in-place mutations
- set_config() replaces the reference on the whole subtree
"""

from __future__ import annotations

import pytest

from formtree import NodeConfig, create_node
from formtree.config import DEFAULT_DELIMITER, create_config

# ---------------------------------------------------------------------------
# NodeConfig
# ---------------------------------------------------------------------------


class TestNodeConfig:
    def test_default_delimiter(self) -> None:
        assert NodeConfig().delimiter == DEFAULT_DELIMITER == "."

    def test_empty_delimiter_rejected(self) -> None:
        with pytest.raises(ValueError, match="delimiter"):
            NodeConfig(delimiter="")

    def test_non_string_delimiter_rejected_on_update(self) -> None:
        config = NodeConfig()
        with pytest.raises(ValueError, match="delimiter"):
            config.update({"delimiter": 3})
        assert config.delimiter == "."

    def test_empty_delimiter_rejected_on_assignment(self) -> None:
        config = NodeConfig()
        with pytest.raises(ValueError, match="delimiter"):
            config.delimiter = ""
        assert config.delimiter == "."

    def test_non_string_delimiter_rejected_on_assignment(self) -> None:
        config = NodeConfig(delimiter="/")
        with pytest.raises(ValueError, match="delimiter"):
            config.delimiter = None  # type: ignore[assignment]
        assert config.delimiter == "/"

    def test_item_access(self) -> None:
        config = NodeConfig().update({"locale": "fr"})
        assert config["delimiter"] == "."
        assert config["locale"] == "fr"
        assert "locale" in config
        assert "delimiter" in config
        assert "missing" not in config

    def test_missing_key(self) -> None:
        config = NodeConfig()
        with pytest.raises(KeyError):
            config["missing"]
        assert config.get("missing") is None
        assert config.get("missing", 1) == 1

    def test_setitem_routes_delimiter(self) -> None:
        config = NodeConfig()
        config["delimiter"] = "/"
        config["theme"] = "dark"
        assert config.delimiter == "/"
        assert config.options == {"theme": "dark"}

    def test_update_returns_same_object(self) -> None:
        config = NodeConfig()
        assert config.update({"a": 1}) is config

    def test_equality_is_identity(self) -> None:
        assert NodeConfig() != NodeConfig()


# ---------------------------------------------------------------------------
# create_config
# ---------------------------------------------------------------------------


class TestCreateConfig:
    def test_fresh_without_parent(self) -> None:
        config = create_config(None, {"delimiter": "/", "locale": "de"})
        assert config.delimiter == "/"
        assert config["locale"] == "de"

    def test_aliases_parent_without_overrides(self) -> None:
        parent = create_node(type="group")
        assert create_config(parent) is parent.config

    def test_overrides_merge_into_parent_object(self) -> None:
        parent = create_node(type="group")
        original = parent.config
        merged = create_config(parent, {"locale": "es"})
        assert merged is original
        assert parent.config["locale"] == "es"


# ---------------------------------------------------------------------------
# Inheritance through the tree
# ---------------------------------------------------------------------------


class TestInheritance:
    def test_siblings_share_one_reference(self) -> None:
        root = create_node(type="group")
        a = create_node(name="a", parent=root)
        b = create_node(name="b", parent=root)
        assert a.config is b.config is root.config

    def test_in_place_mutation_is_seen_by_siblings(self) -> None:
        root = create_node(type="group")
        a = create_node(name="a", parent=root)
        b = create_node(name="b", parent=root)

        a.config["locale"] = "fr"
        a.config.delimiter = "/"

        assert b.config["locale"] == "fr"
        assert b.config.delimiter == "/"
        assert root.config.delimiter == "/"

    def test_child_overrides_mutate_parent_config(self) -> None:
        root = create_node(type="group", name="root")
        child = create_node(name="child", parent=root, config={"delimiter": "/"})
        assert root.config.delimiter == "/"
        assert child.config is root.config

    def test_root_config_is_fresh_per_tree(self) -> None:
        assert create_node().config is not create_node().config

    def test_adopted_children_take_parent_config(self) -> None:
        loose = create_node(name="loose", config={"delimiter": "|"})
        group = create_node(type="group", children=[loose])
        assert loose.config is group.config
        assert loose.config.delimiter == "."


class TestSetConfig:
    def test_replaces_reference_on_whole_subtree(self) -> None:
        root = create_node(type="group", name="root")
        branch = create_node(type="group", name="branch", parent=root)
        leaf = create_node(name="leaf", parent=branch)
        replacement = NodeConfig(delimiter="/")

        root.set_config(replacement)

        assert root.config is replacement
        assert branch.config is replacement
        assert leaf.config is replacement

    def test_only_descends(self) -> None:
        root = create_node(type="group", name="root")
        branch = create_node(type="group", name="branch", parent=root)
        original = root.config

        branch.set_config(NodeConfig(delimiter="/"))

        assert root.config is original
        assert branch.config is not original

    def test_addresses_follow_new_delimiter(self) -> None:
        root = create_node(type="group", name="root")
        leaf = create_node(name="leaf", parent=root)
        root.set_config(NodeConfig(delimiter="/"))
        assert root.at("root/leaf") is leaf

    def test_mapping_is_coerced_and_shared(self) -> None:
        root = create_node(type="group", name="root")
        branch = create_node(type="group", name="branch", parent=root)
        leaf = create_node(name="leaf", parent=branch)

        root.set_config({"delimiter": "/", "locale": "fr"})

        assert isinstance(root.config, NodeConfig)
        assert leaf.config is root.config
        assert root.config["locale"] == "fr"
        assert root.at("root/branch/leaf") is leaf

    def test_mapping_with_bad_delimiter_rejected(self) -> None:
        root = create_node(type="group", name="root")
        original = root.config
        with pytest.raises(ValueError, match="delimiter"):
            root.set_config({"delimiter": ""})
        assert root.config is original

    def test_other_types_rejected(self) -> None:
        root = create_node(type="group", name="root")
        original = root.config
        with pytest.raises(TypeError, match="NodeConfig or a mapping"):
            root.set_config(42)
        assert root.config is original


class TestRejectedDelimiterKeepsLookups:
    def test_lookup_still_resolves_after_rejected_write(self) -> None:
        root = create_node(type="group", name="root")
        leaf = create_node(name="leaf", parent=root)
        with pytest.raises(ValueError):
            leaf.config.delimiter = ""
        assert root.at("root.leaf") is leaf
        assert root.at("root.missing") is None
