"""Make WordPress site publisher."""

import base64
import json

import httpx

from openverse_automations import console
from openverse_automations.core import DigestPost, PublishError, Publisher


class MakeSitePublisher(Publisher):
    """Create posts through the WordPress REST API."""

    def __init__(
        self,
        username: str,
        password: str,
        api_base: str = "https://make.wordpress.org/openverse/wp-json/wp/v2/",
        timeout: float = 30.0,
    ) -> None:
        """Initialize publisher.

        Args:
            username: Make site account making the post.
            password: Application password of that account, not its login password.
            api_base: WordPress REST API root, ending with a slash.
            timeout: Request timeout in seconds.
        """
        self.username = username
        self.password = password
        self.api_base = api_base if api_base.endswith("/") else f"{api_base}/"
        self.timeout = timeout

    async def publish(self, post: DigestPost) -> int:
        """Create the post.

        Returns:
            Id of the created post, 0 if the site did not report one.

        Raises:
            PublishError: If the site answers with anything but 201.
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    f"{self.api_base}posts",
                    json=post.to_payload(),
                    headers=self._get_headers(),
                )
            except httpx.HTTPError as e:
                raise PublishError(None, f"{type(e).__name__}: {e}") from e

        if response.status_code != 201:
            raise PublishError(response.status_code, response.text)

        data = response.json()
        console.info(json.dumps(data, indent=2))
        return int(data.get("id", 0))

    def _get_headers(self) -> dict[str, str]:
        token = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
        return {"Authorization": f"Basic {token}"}
