"""Request-scoped identity and post context supplied by the hosting platform.

The platform proxies every request with headers naming the current post, its
subreddit and the calling user. Handlers receive them as one immutable
`RequestContext` instead of reading ambient globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from gamehost.domain.common.errors import MissingContextError
from gamehost.settings import optional_str, settings

ANONYMOUS = "anonymous"


@dataclass(frozen=True, slots=True)
class RequestContext:
	post_id: Optional[str]
	subreddit_name: Optional[str] = None
	username: Optional[str] = None

	@property
	def effective_username(self) -> str:
		return self.username or ANONYMOUS

	@property
	def is_anonymous(self) -> bool:
		return self.effective_username == ANONYMOUS

	def require_post(self) -> str:
		if not self.post_id:
			raise MissingContextError()
		return self.post_id


async def get_request_context(request: Request) -> RequestContext:
	headers = request.headers
	return RequestContext(
		post_id=optional_str(headers.get(settings.platform_post_header)),
		subreddit_name=optional_str(headers.get(settings.platform_subreddit_header)),
		username=optional_str(headers.get(settings.platform_user_header)),
	)
