import re
from pathlib import Path

import pytest
import yaml

from kubeadd.errors import OperationFailedError

PATH_TOKEN = re.compile(r'\.\["([^"]+)"\]|\.([A-Za-z0-9_-]+)|\[(\d+)\]')

KUBECONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "clusters": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "cluster": {
                        "type": "object",
                        "properties": {"server": {"type": "string"}},
                        "required": ["server"],
                    },
                },
                "required": ["name", "cluster"],
            },
        },
        "contexts": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "context": {
                        "type": "object",
                        "required": ["cluster", "user"],
                    },
                },
                "required": ["name", "context"],
            },
        },
        "users": {"type": "array"},
        "current-context": {"type": "string"},
    },
    "required": ["clusters", "contexts", "users"],
}


def kubeconfig_doc(*entries, current=None):
    """Build a kubeconfig dict from (name, server) pairs."""
    doc = {
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [
            {"name": name, "cluster": {"server": server, "insecure-skip-tls-verify": True}}
            for name, server in entries
        ],
        "contexts": [
            {"name": name, "context": {"cluster": name, "user": name}}
            for name, _ in entries
        ],
        "users": [{"name": name, "user": {"token": f"token-{name}"}} for name, _ in entries],
        "preferences": {},
    }
    doc["current-context"] = current or (entries[0][0] if entries else "")
    return doc


def write_yaml(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(data, f, sort_keys=False)
    return path


def load_yaml(path: Path):
    with open(path) as f:
        return yaml.safe_load(f)


def _tokens(expression):
    tokens = []
    for quoted, key, index in PATH_TOKEN.findall(expression):
        if index:
            tokens.append(int(index))
        else:
            tokens.append(quoted or key)
    return tokens


class FakeYaml:
    """In-process stand-in for yq."""

    def __init__(self):
        self.writes = []

    def read(self, expression, path):
        node = load_yaml(path)
        for token in _tokens(expression):
            try:
                node = node[token]
            except (KeyError, IndexError, TypeError):
                return None
        if node is None:
            return None
        return str(node)

    def write(self, expression, value, path):
        self.writes.append((expression, value))
        doc = load_yaml(path) or {}
        tokens = _tokens(expression)
        node = doc
        for token, following in zip(tokens, tokens[1:]):
            empty = [] if isinstance(following, int) else {}
            if isinstance(token, int):
                while len(node) <= token:
                    node.append(empty)
                    empty = [] if isinstance(following, int) else {}
                if node[token] is None:
                    node[token] = empty
            elif node.get(token) is None:
                node[token] = empty
            node = node[token]
        last = tokens[-1]
        if isinstance(last, int):
            while len(node) <= last:
                node.append(None)
        node[last] = value
        write_yaml(path, doc)


class FakeKube:
    """In-process stand-in for kubectl config."""

    def __init__(self, fail_cluster_delete=False):
        self.calls = []
        self.fail_cluster_delete = fail_cluster_delete

    def get_clusters(self, path):
        self.calls.append(("get-clusters", str(path)))
        doc = load_yaml(path) or {}
        return [c["name"] for c in doc.get("clusters") or []]

    def _delete(self, section, name, path):
        doc = load_yaml(path) or {}
        entries = doc.get(section) or []
        remaining = [e for e in entries if e.get("name") != name]
        if len(remaining) == len(entries):
            raise OperationFailedError(f"cannot delete {section[:-1]} {name}, not in {path}")
        doc[section] = remaining
        write_yaml(path, doc)

    def delete_cluster(self, name, path):
        self.calls.append(("delete-cluster", name))
        if self.fail_cluster_delete:
            raise OperationFailedError("delete-cluster failed", returncode=1, stderr="boom")
        self._delete("clusters", name, path)

    def delete_context(self, name, path):
        self.calls.append(("delete-context", name))
        self._delete("contexts", name, path)

    def delete_user(self, name, path):
        self.calls.append(("delete-user", name))
        self._delete("users", name, path)

    def merge(self, paths):
        self.calls.append(("merge", [str(p) for p in paths]))
        merged = {"apiVersion": "v1", "kind": "Config", "preferences": {}}
        sections = {"clusters": {}, "contexts": {}, "users": {}}
        for path in paths:
            doc = load_yaml(path) or {}
            for section, by_name in sections.items():
                for entry in doc.get(section) or []:
                    by_name[entry["name"]] = entry
            if doc.get("current-context"):
                merged["current-context"] = doc["current-context"]
        for section, by_name in sections.items():
            merged[section] = [by_name[name] for name in sorted(by_name)]
        return yaml.safe_dump(merged, sort_keys=False)


class Answers:
    """Canned replies for interactive prompts."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return self.answers.pop(0)


@pytest.fixture
def fake_yaml():
    return FakeYaml()


@pytest.fixture
def fake_kube():
    return FakeKube()


@pytest.fixture
def kubeconfig(tmp_path):
    """Destination kubeconfig with two clusters."""
    return write_yaml(
        tmp_path / ".kube" / "config",
        kubeconfig_doc(("prod", "https://prod.example.com:6443"), ("staging", "https://10.0.0.5:6443")),
    )


@pytest.fixture
def source_config(tmp_path):
    """Kubeconfig as downloaded from a cloud console, with mismatched names."""
    doc = {
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [{"name": "kubernetes", "cluster": {"server": "https://new.example.com:6443",
                                                        "certificate-authority-data": "Q0EK"}}],
        "contexts": [{"name": "kubernetes-admin@kubernetes",
                      "context": {"cluster": "kubernetes", "user": "kubernetes-admin"}}],
        "users": [{"name": "kubernetes-admin", "user": {"client-certificate-data": "Q0VSVAo="}}],
        "current-context": "kubernetes-admin@kubernetes",
    }
    return write_yaml(tmp_path / "downloads" / "new-cluster.yaml", doc)


def backups_of(path: Path):
    return sorted(path.parent.glob(path.name + ".backup.*"))
