"""GitHub resource clients."""

from prsight.clients.commits import CommitsClient
from prsight.clients.pulls import PullsClient
from prsight.clients.repos import ReposClient
from prsight.clients.search import SearchClient

__all__ = [
    "CommitsClient",
    "PullsClient",
    "ReposClient",
    "SearchClient",
]
