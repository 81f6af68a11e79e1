from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING, Any, Final

import requests
from github import Auth, Github, GithubException

from .exceptions import RemoteCallError, VerificationError
from .models import TargetRepository, TransferResult, build_issue_url

if TYPE_CHECKING:
    from .utils import StepLogger
    from github.Repository import Repository

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

_CLIENT_MUTATION_ID_BYTES: Final[int] = 20

TRANSFER_ISSUE_MUTATION: Final[str] = """
mutation TransferIssue($clientMutationId: String!, $repositoryId: ID!, $issueId: ID!) {
    transferIssue(input: {
        clientMutationId: $clientMutationId,
        repositoryId: $repositoryId,
        issueId: $issueId
    }) {
        issue {
            number
        }
    }
}
"""


def get_client(token: str) -> Github:
    """Get a GitHub client using the token."""
    return Github(auth=Auth.Token(token))


def new_client_mutation_id() -> str:
    """Return a fresh random mutation token: 20 random bytes, hex-encoded."""
    return secrets.token_hex(_CLIENT_MUTATION_ID_BYTES)


def get_target_repo(
    client: Github, owner_login: str, repo_name: str, log: StepLogger = logger
) -> tuple[Repository, TargetRepository]:
    """Look up the target repository and make sure we can access it.

    Returns:
        The PyGithub repository and its TargetRepository identity

    Raises:
        VerificationError: If the repository does not exist or is not accessible
    """
    try:
        github_repo = client.get_repo(f"{owner_login}/{repo_name}")
    except GithubException as e:
        log.debug(f"Error getting {repo_name}: {e.status} - {e.data}")
        message = e.message if e.message else str(e)
        msg = f"Could not access {repo_name}: {message}"
        raise VerificationError(msg) from e
    except requests.RequestException as e:
        log.debug(f"Error getting {repo_name}: {e!r}")
        msg = f"Could not access {repo_name}: {e}"
        raise VerificationError(msg) from e

    log.debug(f"Retrieved target repo metadata for {github_repo.full_name} (node id {github_repo.node_id})")
    return github_repo, TargetRepository(owner_login=owner_login, name=repo_name, node_id=github_repo.node_id)


def transfer_issue(
    client: Github,
    issue_node_id: str,
    target: TargetRepository,
    *,
    server_url: str,
    log: StepLogger = logger,
) -> TransferResult:
    """Transfer an issue to the target repository with the GraphQL ``transferIssue`` mutation.

    PyGithub has no class-level support for issue transfer, so the mutation goes
    through its requester to reuse authentication.

    Args:
        client: Authenticated GitHub client
        issue_node_id: GraphQL node id of the issue to move
        target: Verified target repository
        server_url: Web host used to build the new issue URL
        log: Logger for this run

    Returns:
        The new issue number and its URL in the target repository

    Raises:
        RemoteCallError: If the mutation fails or returns no issue
    """
    variables: dict[str, Any] = {
        "clientMutationId": new_client_mutation_id(),
        "repositoryId": target.node_id,
        "issueId": issue_node_id,
    }
    log.debug(f"Transferring issue {issue_node_id} to {target.full_name} with mutation id {variables['clientMutationId']}")

    try:
        _, data = client.requester.graphql_query(TRANSFER_ISSUE_MUTATION, variables)
    except GithubException as e:
        msg = f"Failed to transfer issue {issue_node_id} to {target.name}: {e}"
        raise RemoteCallError(msg) from e

    issue = ((data.get("data") or {}).get("transferIssue") or {}).get("issue")
    if not issue or issue.get("number") is None:
        msg = f"Transfer of issue {issue_node_id} to {target.name} returned no issue: {data}"
        raise RemoteCallError(msg)

    number = int(issue["number"])
    return TransferResult(
        new_issue_number=number,
        new_issue_url=build_issue_url(server_url, target.owner_login, target.name, number),
    )
