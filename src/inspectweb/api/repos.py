"""Repositories available to the signed-in user."""

from fastapi import APIRouter, Depends

from inspectweb.api.auth import get_credential
from inspectweb.core.credential import Credential
from inspectweb.github.client import GitHubClient, get_github

router = APIRouter(prefix="/api/repos", tags=["repos"])


@router.get("")
async def list_repos(
    credential: Credential = Depends(get_credential),
    github: GitHubClient = Depends(get_github),
) -> dict:
    repos = await github.list_repos(credential)
    return {"repos": [repo.model_dump(by_alias=True) for repo in repos]}
