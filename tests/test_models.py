"""モデルと例外のテスト。"""

from agenter.errors import DirtyWorkingTreeError, ExternalToolError, PreconditionError
from agenter.models.agent import AgentName, BranchState, WorkspaceBinding
from agenter.models.workspace import PushResult, ReturnResult, TopicResult, WorktreeInfo


class TestAgentModels:
    """エージェント関連モデルのテスト。"""

    def test_agent_name_values(self):
        assert [a.value for a in AgentName] == ["forge", "axiom", "jarvis"]

    def test_branch_state_values(self):
        assert BranchState("topic") == BranchState.TOPIC

    def test_workspace_binding(self):
        assert WorkspaceBinding(dir_name="myapp-forge", agent=AgentName.FORGE).is_bound
        assert not WorkspaceBinding(dir_name="myapp").is_bound


class TestWorkspaceModels:
    """ワークスペース関連モデルのテスト。"""

    def test_worktree_info_defaults(self):
        info = WorktreeInfo(path="/src/myapp")
        assert info.branch == ""
        assert info.is_bare is False
        assert info.is_detached is False

    def test_return_result_warnings_are_independent(self):
        """warnings のデフォルトがインスタンス間で共有されないことをテスト。"""
        first = ReturnResult(agent=AgentName.FORGE, base_branch="forge-worktree")
        second = ReturnResult(agent=AgentName.FORGE, base_branch="forge-worktree")
        first.warnings.append("x")
        assert second.warnings == []

    def test_return_result_dump(self):
        result = ReturnResult(
            agent=AgentName.AXIOM,
            base_branch="axiom-worktree",
            switched=True,
            topic=TopicResult(agent=AgentName.AXIOM, topic="api", branch="axiom-worktree-api"),
        )
        dumped = result.model_dump(mode="json")
        assert dumped["agent"] == "axiom"
        assert dumped["topic"]["branch"] == "axiom-worktree-api"

    def test_push_result_without_url(self):
        assert PushResult(branch="forge-worktree-login", remote="origin").pr_url is None


class TestErrors:
    """例外のテスト。"""

    def test_hint(self):
        error = PreconditionError("pushするトピックがありません", hint="make してください")
        assert str(error) == "pushするトピックがありません"
        assert error.hint == "make してください"

    def test_dirty_entries(self):
        error = DirtyWorkingTreeError([" M a.py"])
        assert error.entries == [" M a.py"]
        assert error.hint is None

    def test_external_tool_output_is_kept(self):
        """出力は加工せず保持し、メッセージには末尾の改行を除いて含めることをテスト。"""
        error = ExternalToolError("pushできません", command=["git", "push"], output="fatal: x\n")
        assert error.output == "fatal: x\n"
        assert error.message == "pushできません: fatal: x"
        assert error.command == ["git", "push"]

    def test_external_tool_without_output(self):
        error = ExternalToolError("git が見つかりません")
        assert error.message == "git が見つかりません"
        assert error.command == []
