"""
Tests for the resolved tree loader.
"""

import json

import pytest

from depgraph import DepKind, Edge, TreeFormatError, load_tree, load_tree_file
from depgraph.resolver.tree_loader import parse_package_ref


def sample_tree():
    return {
        "root": {"name": "app", "version": "1.0.0"},
        "packages": [
            {
                "name": "serde",
                "version": "1.0.1",
                "kind": "build",
                "dependencies": [{"name": "serde_derive", "version": "1.0.1"}],
            },
            {
                "name": "app",
                "version": "1.0.0",
                "kind": "build",
                "dependencies": [
                    {"name": "serde", "version": "1.0.1"},
                    {"name": "criterion", "version": "0.5.0"},
                ],
            },
            {"name": "criterion", "version": "0.5.0", "kind": "dev"},
            {"name": "serde_derive", "version": "1.0.1", "kind": "optional"},
        ],
    }


class TestLoadTree:
    """Tests for load_tree."""

    def test_root_first(self):
        """Test the declared root lands in slot 0."""
        graph = load_tree(sample_tree())

        assert graph.nodes[0].name == "app"
        assert len(graph) == 4

    def test_kinds_applied(self):
        """Test kinds from package entries reach the nodes."""
        graph = load_tree(sample_tree())
        kinds = {dep.name: dep.kind for dep in graph.nodes}

        assert kinds == {
            "app": DepKind.BUILD,
            "serde": DepKind.BUILD,
            "criterion": DepKind.DEV,
            "serde_derive": DepKind.OPTIONAL,
        }

    def test_edges(self):
        """Test every dependency becomes an edge."""
        graph = load_tree(sample_tree())
        slot = {dep.name: i for i, dep in enumerate(graph.nodes)}

        assert set(graph.edges) == {
            Edge(slot["app"], slot["serde"]),
            Edge(slot["app"], slot["criterion"]),
            Edge(slot["serde"], slot["serde_derive"]),
        }

    def test_undeclared_dependency_is_normal(self):
        """Test a dependency without a package entry gets NORMAL."""
        data = {
            "packages": [
                {
                    "name": "app",
                    "version": "1.0",
                    "dependencies": [{"name": "libc", "version": "0.2"}],
                }
            ]
        }
        graph = load_tree(data)

        assert graph.get(graph.find("libc", "0.2")).kind == DepKind.NORMAL

    def test_missing_root_warns(self):
        """Test a root absent from the tree keeps the default order."""
        data = sample_tree()
        data["root"] = {"name": "ghost", "version": "0.0.1"}

        graph = load_tree(data)

        assert graph.nodes[0].name == "serde"
        warnings = graph.warnings.get_by_level("WARNING")
        assert len(warnings) == 1
        assert "ghost@0.0.1" in warnings[0].message

    def test_no_root(self):
        """Test a document without root keeps package order."""
        data = sample_tree()
        del data["root"]

        graph = load_tree(data)

        assert graph.nodes[0].name == "serde"
        assert graph.warnings.get_all() == []

    def test_renders(self):
        """Test a loaded tree renders end to end."""
        output = load_tree(sample_tree()).render()

        assert output.startswith("digraph dependencies {\n")
        assert '\tN0[label="app"][color=black];' in output


class TestLoadTreeErrors:
    """Tests for malformed documents."""

    def test_not_an_object(self):
        """Test a non-object document is rejected."""
        with pytest.raises(TreeFormatError):
            load_tree([])

    def test_packages_not_a_list(self):
        """Test 'packages' must be a list."""
        with pytest.raises(TreeFormatError, match="packages"):
            load_tree({"packages": {}})

    def test_unknown_kind(self):
        """Test an unknown kind reports its location."""
        data = sample_tree()
        data["packages"][2]["kind"] = "test"

        with pytest.raises(TreeFormatError) as info:
            load_tree(data)

        assert info.value.path == "packages[2].kind"

    def test_missing_version(self):
        """Test a dependency without version is rejected."""
        data = sample_tree()
        data["packages"][1]["dependencies"][0] = {"name": "serde"}

        with pytest.raises(TreeFormatError) as info:
            load_tree(data)

        assert info.value.path == "packages[1].dependencies[0]"

    def test_invalid_json_file(self, tmp_path):
        """Test a file with broken JSON."""
        path = tmp_path / "tree.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(TreeFormatError, match="Invalid JSON"):
            load_tree_file(path)

    def test_load_file(self, tmp_path):
        """Test loading a valid file."""
        path = tmp_path / "tree.json"
        path.write_text(json.dumps(sample_tree()), encoding="utf-8")

        graph = load_tree_file(path)

        assert graph.nodes[0].name == "app"


class TestParsePackageRef:
    """Tests for name@version parsing."""

    def test_valid(self):
        """Test a plain reference."""
        assert parse_package_ref("serde@1.0.1") == ("serde", "1.0.1")

    def test_scoped_name(self):
        """Test the last '@' separates the version."""
        assert parse_package_ref("@scope/pkg@2.0") == ("@scope/pkg", "2.0")

    @pytest.mark.parametrize("ref", ["serde", "serde@", "@1.0"])
    def test_invalid(self, ref):
        """Test references without name or version."""
        with pytest.raises(ValueError):
            parse_package_ref(ref)
