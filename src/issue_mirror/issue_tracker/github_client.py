"""GitHub API implementation of issue tracker."""

from typing import Any

import httpx

from ..errors import GraphQLError
from .public_api import Comment, IssueInfo, IssueState, IssueTracker


ISSUE_ID_QUERY = """
query($owner: String!, $name: String!, $number: Int!) {
  repository(owner: $owner, name: $name) {
    issue(number: $number) {
      id
    }
  }
}
"""

DELETE_ISSUE_MUTATION = """
mutation($issueId: ID!) {
  deleteIssue(input: {issueId: $issueId}) {
    repository {
      id
    }
  }
}
"""


class GitHubClient(IssueTracker):
    """
    GitHub implementation of the issue tracker interface.

    Comments, issue reads and writes go through the REST API. Deleting an
    issue is only exposed through GraphQL, which addresses issues by node ID
    rather than by number.
    """

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._token = token
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {self._token}",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def graphql_url(self) -> str:
        """GraphQL endpoint; GitHub Enterprise serves it beside /api/v3."""
        if self._base_url.endswith("/v3"):
            return self._base_url[: -len("/v3")] + "/graphql"
        return self._base_url + "/graphql"

    async def list_comments(self, repo: str, issue_number: int) -> list[Comment]:
        """List comments on an issue (first page only)."""
        response = await self._client.get(f"/repos/{repo}/issues/{issue_number}/comments")
        response.raise_for_status()
        return [self._parse_comment(item) for item in response.json()]

    async def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        """Add a comment to an issue."""
        response = await self._client.post(
            f"/repos/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        response.raise_for_status()
        return self._parse_comment(response.json())

    async def delete_comment(self, repo: str, comment_id: str) -> None:
        """Delete an issue comment."""
        response = await self._client.delete(f"/repos/{repo}/issues/comments/{comment_id}")
        response.raise_for_status()

    async def create_issue(
        self,
        repo: str,
        title: str,
        body: str | None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> IssueInfo:
        """Create a new issue."""
        response = await self._client.post(
            f"/repos/{repo}/issues",
            json={
                "title": title,
                "body": body,
                "labels": labels or [],
                "assignees": assignees or [],
            },
        )
        response.raise_for_status()
        return self._parse_issue(response.json())

    async def get_issue(self, repo: str, issue_number: int) -> IssueInfo:
        """Get information about a GitHub issue."""
        response = await self._client.get(f"/repos/{repo}/issues/{issue_number}")
        response.raise_for_status()
        return self._parse_issue(response.json())

    async def update_issue(
        self,
        repo: str,
        issue_number: int,
        title: str | None = None,
        body: str | None = None,
        state: IssueState | None = None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> IssueInfo:
        """Update an issue's fields."""
        update_data: dict[str, Any] = {}

        if title is not None:
            update_data["title"] = title
        if body is not None:
            update_data["body"] = body
        if state is not None:
            update_data["state"] = state.value
        if labels is not None:
            update_data["labels"] = labels
        if assignees is not None:
            update_data["assignees"] = assignees

        response = await self._client.patch(
            f"/repos/{repo}/issues/{issue_number}",
            json=update_data,
        )
        response.raise_for_status()
        return self._parse_issue(response.json())

    async def get_issue_node_id(self, repo: str, issue_number: int) -> str:
        """Resolve the GraphQL node ID of an issue."""
        owner, _, name = repo.partition("/")
        data = await self._graphql(
            ISSUE_ID_QUERY,
            {"owner": owner, "name": name, "number": int(issue_number)},
        )
        issue = ((data.get("repository") or {}).get("issue")) or {}
        node_id = issue.get("id")
        if not node_id:
            raise GraphQLError(f"Issue {repo}#{issue_number} not found")
        return node_id

    async def delete_issue(self, node_id: str) -> None:
        """Delete an issue through the GraphQL deleteIssue mutation."""
        await self._graphql(DELETE_ISSUE_MUTATION, {"issueId": node_id})

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a GraphQL document and return its data payload."""
        response = await self._client.post(
            self.graphql_url,
            json={"query": query, "variables": variables},
        )
        response.raise_for_status()
        payload = response.json()

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(error.get("message", "unknown error") for error in errors)
            raise GraphQLError(f"GraphQL request failed: {messages}", errors=errors)

        return payload.get("data") or {}

    def _parse_comment(self, data: dict) -> Comment:
        """Parse GitHub API response into Comment."""
        return Comment(
            id=str(data["id"]),
            author=(data.get("user") or {}).get("login", ""),
            body=data.get("body") or "",
        )

    def _parse_issue(self, data: dict) -> IssueInfo:
        """Parse GitHub API response into IssueInfo."""
        state = data.get("state", "open")
        return IssueInfo(
            number=data["number"],
            title=data["title"],
            body=data.get("body"),
            state=IssueState.CLOSED if state == "closed" else IssueState.OPEN,
            labels=[label["name"] for label in data.get("labels", [])],
            assignees=[user["login"] for user in data.get("assignees") or []],
        )
