"""命名規則のテスト。"""

import itertools
import os

import pytest

from agenter.errors import IdentityError
from agenter.models.agent import ROSTER, AgentName, BranchState
from agenter.naming import (
    base_branch,
    classify_branch,
    infer_agent_from_worktree_dir,
    topic_branch,
    topic_of,
    worktree_path,
    worktree_paths_for_repo,
)


class TestWorktreePath:
    """worktree_path のテスト。"""

    def test_concatenates_repo_and_agent(self):
        """<親>/<リポジトリ名>-<agent> になることをテスト。"""
        assert worktree_path("/src", "myapp", AgentName.FORGE) == os.path.join("/src", "myapp-forge")

    def test_paths_for_repo_are_distinct(self):
        """同じリポジトリでエージェントごとに異なるパスになることをテスト。"""
        paths = worktree_paths_for_repo("/src/myapp")
        assert list(paths) == list(ROSTER)
        assert len(set(paths.values())) == len(ROSTER)
        assert paths[AgentName.JARVIS] == os.path.join("/src", "myapp-jarvis")

    def test_paths_for_repo_ignore_trailing_slash(self):
        """末尾のスラッシュがあっても同じパスになることをテスト。"""
        assert worktree_paths_for_repo("/src/myapp/") == worktree_paths_for_repo("/src/myapp")


class TestBranchNames:
    """base_branch / topic_branch のテスト。"""

    def test_base_branch(self):
        assert base_branch(AgentName.FORGE) == "forge-worktree"
        assert base_branch(AgentName.AXIOM) == "axiom-worktree"
        assert base_branch(AgentName.JARVIS) == "jarvis-worktree"

    def test_topic_branch(self):
        assert topic_branch(AgentName.FORGE, "login") == "forge-worktree-login"

    def test_topic_branch_rejects_empty(self):
        with pytest.raises(ValueError):
            topic_branch(AgentName.FORGE, "")

    def test_names_are_injective(self):
        """(agent, topic) の組が異なれば必ず異なるブランチ名になることをテスト。"""
        topics = ["", "a", "b", "login", "worktree", "a-b", "x-1"]
        seen: dict[str, tuple[AgentName, str]] = {}
        for agent, topic in itertools.product(ROSTER, topics):
            name = topic_branch(agent, topic) if topic else base_branch(agent)
            assert name not in seen, f"{(agent, topic)} と {seen.get(name)} が衝突"
            seen[name] = (agent, topic)

    @pytest.mark.parametrize("agent", ROSTER)
    def test_topic_has_base_as_strict_prefix(self, agent):
        name = topic_branch(agent, "t")
        assert name.startswith(base_branch(agent))
        assert name != base_branch(agent)


class TestInferAgentFromWorktreeDir:
    """infer_agent_from_worktree_dir のテスト。"""

    @pytest.mark.parametrize(
        "dir_name,expected",
        [
            ("project-forge", AgentName.FORGE),
            ("myapp-axiom", AgentName.AXIOM),
            ("test-jarvis", AgentName.JARVIS),
            ("my-forge-app-jarvis", AgentName.JARVIS),
        ],
    )
    def test_valid(self, dir_name, expected):
        assert infer_agent_from_worktree_dir(dir_name) == expected

    @pytest.mark.parametrize("dir_name", ["project", "forge", "project-unknown", "project-forger"])
    def test_invalid(self, dir_name):
        with pytest.raises(IdentityError) as exc_info:
            infer_agent_from_worktree_dir(dir_name)
        assert dir_name in exc_info.value.message


class TestClassifyBranch:
    """classify_branch / topic_of のテスト。"""

    def test_base(self):
        assert classify_branch("forge-worktree", AgentName.FORGE) == BranchState.BASE

    def test_topic(self):
        assert classify_branch("forge-worktree-login", AgentName.FORGE) == BranchState.TOPIC
        assert topic_of("forge-worktree-login", AgentName.FORGE) == "login"
        assert topic_of("forge-worktree-a-b", AgentName.FORGE) == "a-b"

    @pytest.mark.parametrize(
        "branch",
        ["main", "forge-worktree-", "forge-worktreex", "axiom-worktree", "axiom-worktree-login"],
    )
    def test_unmanaged(self, branch):
        assert classify_branch(branch, AgentName.FORGE) == BranchState.UNMANAGED
        assert topic_of(branch, AgentName.FORGE) is None
