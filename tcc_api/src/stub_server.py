"""
Stub server with canned responses for contract tests.

Mappings are kept in an ordered table and evaluated first-match-wins, so the
specific cases go before the catch-all ones. Registering a mapping whose
request pattern equals an existing one replaces that entry in place: the last
configured response for an identical pattern wins.
"""
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from fnmatch import fnmatchcase
from typing import Any, Dict, List, Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from ..models import models
from ..helper.utils import setup_logging

logger = setup_logging() # initialize logger

WILDCARD = "*"

# token returned by the default TCCTest login stub
CANNED_TOKEN = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJ1bmlxdWVfbmFtZSI6IlRDQ1Rlc3QiLCJuYW1laWQiOiJUQ0NUZXN0Iiwic3ViIjoiVENDVGVzdCIsImp0aSI6IjM4OGZiODRkLWQzY2QtNGYxOS04MzBjLWU5MzEyY2NlMjliNSIsImlhdCI6MTc2MTc1MDUxMywibmJmIjoxNzYxNzUwNTEzLCJleHAiOjE3NjE3NTQxMTMsImlzcyI6IlRDQ0p3dEFwaSIsImF1ZCI6IlRDQ0p3dEFwaVVzZXJzIn0."
    "JU_onHu05CJwaW5YfrBQDs3IdXSgur4enWeKPpj6mzI"
)


def value_matches(pattern, value) -> bool:
    if isinstance(pattern, str) and WILDCARD in pattern:
        return isinstance(value, str) and fnmatchcase(value, pattern)
    return pattern == value


@dataclass
class StubRequest:
    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    body_json: Optional[Dict[str, Any]] = None
    body_text: Optional[str] = None

    def matches(self, method: str, path: str, headers: Dict[str, str], body: bytes) -> bool:
        if method.upper() != self.method.upper() or path != self.path:
            return False

        lowered = {name.lower(): value for name, value in headers.items()}
        for name, pattern in self.headers.items():
            if name.lower() not in lowered or not value_matches(pattern, lowered[name.lower()]):
                return False

        if self.body_text is not None and body.decode("utf-8", errors="replace") != self.body_text:
            return False

        if self.body_json is not None:
            try:
                payload = json.loads(body)
            except ValueError:
                return False
            if not isinstance(payload, dict):
                return False
            # partial mapping: extra keys in the request are allowed
            for key, pattern in self.body_json.items():
                if key not in payload or not value_matches(pattern, payload[key]):
                    return False

        return True


@dataclass
class StubResponse:
    status_code: int = 200
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class StubMapping:
    request: StubRequest
    response: StubResponse


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: Dict[str, str]
    body: bytes
    matched: Optional[StubMapping]


class StubServer:
    def __init__(self, with_defaults: bool = True):
        self.mappings: List[StubMapping] = []
        self.requests: List[RecordedRequest] = []
        if with_defaults:
            self.setup_default_mocks()

    def given(self, request: StubRequest, response: StubResponse) -> StubMapping:
        mapping = StubMapping(request=request, response=response)
        for index, existing in enumerate(self.mappings):
            if existing.request == request:
                self.mappings[index] = mapping
                return mapping
        self.mappings.append(mapping)
        return mapping

    def match(self, method: str, path: str, headers: Dict[str, str], body: bytes) -> Optional[StubMapping]:
        for mapping in self.mappings:
            if mapping.request.matches(method, path, headers, body):
                return mapping
        return None

    def handle(self, method: str, path: str, headers: Dict[str, str], body: bytes) -> StubResponse:
        mapping = self.match(method, path, headers, body)
        self.requests.append(RecordedRequest(method, path, dict(headers), body, mapping))
        if mapping is None:
            logger.warning(f"no stub matched {method} {path}")
            return StubResponse(status_code=404, body={"message": "No matching stub"})
        return mapping.response

    def reset(self):
        self.mappings.clear()
        self.requests.clear()
        self.setup_default_mocks()

    def setup_default_mocks(self):
        json_header = {"Content-Type": "application/json*"}
        bearer_header = {"Authorization": "Bearer *"}

        # malformed body on login
        self.given(
            StubRequest("POST", "/api/auth/token", body_text="{ invalid json }"),
            StubResponse(400, {"message": "Invalid JSON format"}),
        )

        # successful authentication
        self.given(
            StubRequest("POST", "/api/auth/token", headers=json_header,
                        body_json={"username": "TCCTest", "password": "Test!456"}),
            StubResponse(200, models.AuthenticationResponse(
                token=CANNED_TOKEN,
                expires=datetime.now(timezone.utc) + timedelta(hours=1),
                username="TCCTest",
                message="Welcome Admin: TCCTest",
            ).model_dump(mode="json", by_alias=True)),
        )

        # any other login
        self.given(
            StubRequest("POST", "/api/auth/token"),
            StubResponse(401, {"message": "Invalid credentials"}),
        )

        # duplicate username
        self.given(
            StubRequest("POST", "/api/account/create", headers=bearer_header,
                        body_json={"username": "TCCTest", "password": WILDCARD}),
            StubResponse(409, {"message": "Username already exists"}),
        )

        # successful account creation
        self.given(
            StubRequest("POST", "/api/account/create", headers={**bearer_header, **json_header},
                        body_json={"username": "mixtest", "password": "11223344"}),
            StubResponse(200, models.CreateAccountResponse(
                success=True,
                message="Account created successfully",
                user_id="2",
                username="mixtest",
                created_at=datetime.now(timezone.utc),
                created_by="TCCTest",
            ).model_dump(mode="json", by_alias=True)),
        )

        # anything else on account creation
        self.given(
            StubRequest("POST", "/api/account/create"),
            StubResponse(401, {"message": "Unauthorized"}),
        )


def create_stub_app(server: StubServer = None) -> FastAPI:
    stub = server or StubServer()
    app = FastAPI(title="TCC Test API stub", openapi_url=None)
    app.state.stub_server = stub

    @app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def serve_stub(path: str, request: Request):
        body = await request.body()
        response = stub.handle(request.method, request.url.path, dict(request.headers), body)
        return JSONResponse(status_code=response.status_code, content=response.body, headers=response.headers or None)

    return app
