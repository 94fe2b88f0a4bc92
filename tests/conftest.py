"""
pytest設定とフィクスチャ

テスト全体で共有されるフィクスチャや設定を定義
"""
import pytest
from pathlib import Path
import sys

# リポジトリのルートをパスに追加
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from textmaster.models.document import Document, DocumentStatus  # noqa: E402
from textmaster.models.project import Project  # noqa: E402
from textmaster.exceptions import type_name  # noqa: E402


class Article:
    """テスト用サブジェクト"""

    def __init__(self, id, title="", body=""):
        self.id = id
        self.title = title
        self.body = body

    def __str__(self):
        return f"Article {self.id}"


class Product:
    """テスト用サブジェクト"""

    def __init__(self, id, name=""):
        self.id = id
        self.name = name


@pytest.fixture
def project():
    """サンプルプロジェクト"""
    return Project(
        id="project-1",
        name="Blog",
        language_from="fr",
        language_to="en",
        category="C014"
    )


@pytest.fixture
def article():
    """サンプル記事"""
    return Article(1, title="Bonjour", body="Le monde")


@pytest.fixture
def product():
    """サンプル商品"""
    return Product(7, name="Chaise")


@pytest.fixture
def articles(article):
    """IDで引ける記事ストア"""
    return {article.id: article}


@pytest.fixture
def reviewed_document(project):
    """レビュー中の Article ドキュメント"""
    return Document(
        id="doc-1",
        title="Article 1",
        status=DocumentStatus.IN_REVIEW,
        original_content={
            "title": {"original_phrase": "Bonjour"},
            "body": {"original_phrase": "Le monde"},
        },
        author_work={"title": "Hello", "body": "The world"},
        custom_data={
            "subject_type": type_name(Article),
            "subject_id": 1,
        },
        project=project
    )
