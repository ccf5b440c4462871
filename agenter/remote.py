"""リモート URL から PR 作成 URL を生成する。"""

DEFAULT_HOST = "github.com"


def derive_pull_request_url(remote_url: str, branch: str, host: str = DEFAULT_HOST) -> str | None:
    """リモート URL とブランチ名から PR 作成 URL を生成する。

    git@github.com:owner/repo.git と https://github.com/owner/repo.git の両方を扱う。
    対象ホスト以外のリモートでは None を返す（エラーではない）。

    Args:
        remote_url: git remote get-url の出力
        branch: pushしたブランチ名
        host: 対象ホスト

    Returns:
        https://<host>/<owner>/<repo>/pull/new/<branch>、または None
    """
    remote = remote_url.strip()
    if host not in remote:
        return None

    url = remote.replace(f"git@{host}:", f"https://{host}/", 1)
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return f"{url}/pull/new/{branch}"
