"""Page-at-a-time access to Identity Store list operations.

Reference: https://boto3.amazonaws.com/v1/documentation/api/latest/guide/paginators.html
"""

from typing import Any, Dict, Iterator, Optional, Protocol

from botocore.client import BaseClient  # type: ignore


class Paginator(Protocol):
    """Drains a multi-page result set one page at a time."""

    def has_more_pages(self) -> bool: ...

    def next_page(self) -> Dict[str, Any]: ...


class IdentityStorePaginator:
    """Step through a botocore paginator one page per call.

    The underlying ``client.get_paginator(method).paginate(**params)`` is
    only started on the first ``next_page`` call, and each later page is
    fetched when asked for. Whether another page follows is read from the
    NextToken of the last page returned.

    Args:
        client (BaseClient): The identitystore service client
        method (str): The list operation, e.g. "list_groups"
        **params: Arguments for ``paginate``, including PaginationConfig
    """

    def __init__(self, client: BaseClient, method: str, **params):
        self._client = client
        self._method = method
        self._params = params
        self._pages: Optional[Iterator[Dict[str, Any]]] = None
        self._started = False
        self._next_token: Optional[str] = None

    def has_more_pages(self) -> bool:
        return not self._started or bool(self._next_token)

    def next_page(self) -> Dict[str, Any]:
        if not self.has_more_pages():
            raise RuntimeError(f"No more pages for {self._method}")

        if self._pages is None:
            paginator = self._client.get_paginator(self._method)
            self._pages = iter(paginator.paginate(**self._params))

        self._started = True
        page = next(self._pages, {})
        self._next_token = page.get("NextToken")
        return page
