"""Shared pytest fixtures for postcrawl tests."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add the package to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from postcrawl import PostCrawlClient  # noqa: E402

API_KEY = "sk_test_123456789"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real config file, ~/.env and API key."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("POSTCRAWL_API_KEY", raising=False)
    monkeypatch.delenv("POSTCRAWL_BASE_URL", raising=False)
    return tmp_path


class Recorder:
    """Mock HTTP handler that replays a queue of responses and records requests.

    Each queued item is an ``httpx.Response`` to return or an exception to raise.
    The last item is repeated once the queue runs out.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def calls(self) -> int:
        return len(self.requests)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


def make_client(handler, **kwargs) -> PostCrawlClient:
    """Build a client whose HTTP traffic goes to ``handler``."""
    kwargs.setdefault("retry_delay", 0)
    return PostCrawlClient(API_KEY, transport=httpx.MockTransport(handler), **kwargs)


@pytest.fixture
def mock_search_response():
    return [
        {
            "title": "Understanding Machine Learning Basics",
            "url": "https://www.reddit.com/r/MachineLearning/comments/1ab2c3d/understanding_machine_learning_basics/",
            "snippet": "A comprehensive guide to machine learning fundamentals...",
            "date": "Dec 28, 2024",
            "image_url": "https://preview.redd.it/ml-basics.jpg",
        },
        {
            "title": "Python Tutorial for Beginners",
            "url": "https://www.tiktok.com/@pythontutor/video/7123456789012345678",
            "snippet": "Learn Python programming from scratch...",
            "date": "Dec 27, 2024",
        },
    ]


@pytest.fixture
def reddit_raw():
    return {
        "id": "1ab2c3d",
        "subredditName": "Python",
        "title": "Test Post Title",
        "name": "test_user",
        "description": "This is the post content",
        "score": 42,
        "upvotes": 45,
        "downvotes": 3,
        "createdAt": "2024-12-28T10:00:00Z",
        "url": "https://www.reddit.com/r/Python/comments/1ab2c3d/test_post/",
        "comments": [
            {
                "id": "c1",
                "name": "commenter",
                "text": "Great post",
                "score": 10,
                "createdAt": "2024-12-28T11:00:00Z",
                "replies": [
                    {
                        "id": "c2",
                        "name": "replier",
                        "text": "Agreed",
                        "score": 2,
                        "createdAt": "2024-12-28T12:00:00Z",
                        "replies": [],
                    }
                ],
            }
        ],
    }


@pytest.fixture
def tiktok_raw():
    return {
        "id": "7123456789012345678",
        "username": "pythontutor",
        "description": "Learn Python in 60 seconds! #python #programming",
        "likes": "1523",
        "comments": [],
        "totalComments": 45,
        "createdAt": "2024-12-27T15:30:00Z",
        "url": "https://www.tiktok.com/@pythontutor/video/7123456789012345678",
        "hashtags": ["python", "programming"],
    }


@pytest.fixture
def mock_extract_response(reddit_raw, tiktok_raw):
    return [
        {
            "url": "https://www.reddit.com/r/Python/comments/1ab2c3d/test_post/",
            "source": "reddit",
            "raw": reddit_raw,
            "markdown": None,
            "error": None,
        },
        {
            "url": "https://www.tiktok.com/@pythontutor/video/7123456789012345678",
            "source": "tiktok",
            "raw": tiktok_raw,
            "markdown": None,
            "error": None,
        },
        {
            "url": "https://invalid.url/post",
            "source": "reddit",
            "raw": None,
            "markdown": None,
            "error": "Failed to extract content: Invalid URL",
        },
    ]


@pytest.fixture
def rate_limit_headers():
    return {
        "X-RateLimit-Limit": "200",
        "X-RateLimit-Remaining": "150",
        "X-RateLimit-Reset": "1703725200",
    }
