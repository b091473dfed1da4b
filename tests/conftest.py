"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from route_resolver.config import Settings
from route_resolver.parsers.typescript_parser import TypeScriptParser


ROUTES_SOURCE = """\
import router from '@adonisjs/core/services/router'

const UsersController = () => import('#controllers/users_controller')
const PostsController = () => import('#controllers/posts_controller')

router.get('/users', [UsersController, 'index'])
router.post('/users', UsersController)
router.get('/posts/:id', [PostsController, 'show']).as('posts.show')
router.get('/legacy', [LegacyReportController, 'index'])
router.get('/about', async () => {
  return 'about'
})
router.get('/odd', ['index', 'show'])

router.group(() => {
  adminRoutes
}).prefix('/admin')
"""

USERS_CONTROLLER_SOURCE = """\
import type { HttpContext } from '@adonisjs/core/http'

export default class UsersController {
  async index({ response }: HttpContext) {
    return response.ok([])
  }

  async store({ request }: HttpContext) {
    return request.all()
  }
}
"""


def offset_of(text: str, needle: str, occurrence: int = 0, delta: int = 1) -> int:
    """Offset ``delta`` characters into the n-th occurrence of ``needle``."""
    start = -1
    for _ in range(occurrence + 1):
        start = text.index(needle, start + 1)
    return start + delta


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture(scope="session")
def ts_parser() -> TypeScriptParser:
    return TypeScriptParser()


@pytest.fixture
def routes_source() -> str:
    return ROUTES_SOURCE


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """
    Build an AdonisJS-like project under tmp_path.

    ``files`` maps relative paths to contents; ``imports`` becomes the
    manifest's imports field unless ``manifest`` overrides the whole file.
    """

    def _make(
        files: dict[str, str] | None = None,
        imports: dict[str, str] | None = None,
        manifest: str | None = None,
    ) -> Path:
        root = tmp_path / "proj"
        root.mkdir(exist_ok=True)
        if manifest is None:
            body: dict = {"name": "proj", "type": "module"}
            if imports is not None:
                body["imports"] = imports
            manifest = json.dumps(body)
        (root / "package.json").write_text(manifest, encoding="utf-8")
        for relative, content in (files or {}).items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def adonis_project(make_project: Callable[..., Path]) -> Path:
    """A project with controllers, routes modules and the usual aliases."""
    return make_project(
        files={
            "app/controllers/users_controller.ts": USERS_CONTROLLER_SOURCE,
            "app/controllers/posts_controller.ts": (
                "export class Helper {\n"
                "  show() {}\n"
                "}\n"
                "\n"
                "export default class PostsController {\n"
                "  show() {}\n"
                "}\n"
            ),
            "app/controllers/legacy_report_controller.ts": (
                "export default class LegacyReportController {\n"
                "  index() {}\n"
                "}\n"
            ),
            "start/routes.ts": ROUTES_SOURCE,
            "start/routes/adminRoutes.ts": "export default function adminRoutes() {}\n",
        },
        imports={
            "#controllers/*": "./app/controllers/*.js",
            "#routes/*": "./start/routes/*.js",
            "#start/kernel": "./start/kernel.js",
        },
    )
