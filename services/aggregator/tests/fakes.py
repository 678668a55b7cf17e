"""Fake NewsData.io / NewsAPI.org payloads and transport."""

import httpx


def newsdata_record(article_id, title, **overrides):
    record = {
        "article_id": article_id,
        "title": title,
        "description": f"{title} description",
        "content": f"{title} content",
        "link": f"https://news.example.com/{article_id}",
        "image_url": f"https://img.example.com/{article_id}.jpg",
        "pubDate": "2024-03-01 08:30:00",
        "source_id": "example",
        "source_name": "Example Times",
        "category": ["technology"],
        "country": ["united states of america"],
        "language": "english",
    }
    record.update(overrides)
    return record


def newsapi_record(url, title, **overrides):
    record = {
        "source": {"id": "wire", "name": "The Wire"},
        "author": "Staff",
        "title": title,
        "description": f"{title} summary",
        "url": url,
        "urlToImage": f"{url}.png",
        "publishedAt": "2024-03-02T10:00:00Z",
        "content": f"{title} body [+1200 chars]",
    }
    record.update(overrides)
    return record


def newsdata_payload(*records):
    return {"status": "success", "totalResults": len(records), "results": list(records)}


def newsapi_payload(*records):
    return {"status": "ok", "totalResults": len(records), "articles": list(records)}


class FakeProviders:
    """Routes requests by host/path to queued responses and records calls."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, host, path, *responses):
        self.routes.setdefault((host, path), []).extend(responses)

    def calls_to(self, host, path=None):
        return [r for r in self.calls if r.url.host == host and (path is None or r.url.path == path)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        queue = self.routes.get((request.url.host, request.url.path))
        if not queue:
            return httpx.Response(404, json={"status": "error", "message": "no route"})
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)
