"""Built-in app catalog available without any user configuration."""

from typing import Tuple

from .entities import App

DEFAULT_APPS: Tuple[App, ...] = (
    App(value="github", name="GitHub", url_template="https://github.com/{profile}"),
    App(value="x", name="X", url_template="https://x.com/{profile}"),
    App(
        value="instagram",
        name="Instagram",
        url_template="https://www.instagram.com/{profile}",
    ),
    App(
        value="linkedin",
        name="LinkedIn",
        url_template="https://www.linkedin.com/in/{profile}",
    ),
    App(value="reddit", name="Reddit", url_template="https://www.reddit.com/user/{profile}"),
    App(value="youtube", name="YouTube", url_template="https://www.youtube.com/@{profile}"),
    App(value="tiktok", name="TikTok", url_template="https://www.tiktok.com/@{profile}"),
    App(value="threads", name="Threads", url_template="https://www.threads.net/@{profile}"),
    App(
        value="mastodon",
        name="Mastodon.social",
        url_template="https://mastodon.social/@{profile}",
    ),
    App(
        value="bluesky",
        name="Bluesky",
        url_template="https://bsky.app/profile/{profile}",
    ),
)
