"""
トランスレーター結合テスト

実際のアダプター・プロバイダー・ファクトリーとモックHTTPトランスポートを組み合わせる
"""
import json

import httpx
import pytest

from conftest import Article, Product
from textmaster.exceptions import (
    DocumentStatusException,
    InvalidArgumentException,
    MappingNotFoundException
)
from textmaster.models.document import Document, DocumentStatus
from textmaster.services.adapters.model_adapter import ModelAdapter
from textmaster.services.document_factory import DefaultDocumentFactory
from textmaster.services.mapping_provider import ArrayBasedMappingProvider
from textmaster.services.translator import Translator
from textmaster.utils.http_client import TextmasterClient


class FakeTextmaster:
    """リクエストを記録するモックAPI"""

    def __init__(self):
        self.requests = []

    def __call__(self, request):
        body = json.loads(request.content) if request.content else {}
        self.requests.append((request.method, request.url.path, body))

        if request.url.path.endswith("/complete"):
            return httpx.Response(200, json={"status": "completed"})
        if request.method == "POST":
            return httpx.Response(
                201, json={"id": "doc-100", **body["document"]}
            )
        return httpx.Response(200, json=body.get("document", {}))


@pytest.fixture
def api():
    return FakeTextmaster()


@pytest.fixture
def client(api):
    http = httpx.Client(transport=httpx.MockTransport(api))
    return TextmasterClient(
        api_key="key",
        api_secret="secret",
        base_url="https://api.test/v1",
        max_retries=0,
        http_client=http
    )


@pytest.fixture
def products(product):
    return {product.id: product}


@pytest.fixture
def translator(client, project, articles, products):
    return Translator(
        [
            ModelAdapter(Article, articles.get),
            ModelAdapter(Product, products.get),
        ],
        ArrayBasedMappingProvider({
            Article: ["title", "body"],
            Product: ["name"],
        }),
        DefaultDocumentFactory(client=client, project=project)
    )


@pytest.mark.integration
class TestTranslatorIntegration:
    """push から pull までの一連の流れ"""

    def test_push_creates_remote_document(self, translator, api, article):
        document = translator.push(article)

        assert document.id == "doc-100"
        method, path, body = api.requests[0]
        assert (method, path) == ("POST", "/v1/clients/projects/project-1/documents")
        assert body["document"]["title"] == "Article 1"
        assert body["document"]["original_content"] == {
            "title": {"original_phrase": "Bonjour"},
            "body": {"original_phrase": "Le monde"},
        }
        assert body["document"]["custom_data"]["subject_id"] == 1

    def test_push_routes_by_subject_type(self, translator, product):
        document = translator.push(product, save=False)

        assert document.original_content == {"name": {"original_phrase": "Chaise"}}
        assert translator.get_subject_from_document(document) is product

    def test_push_existing_document_updates(self, translator, api, article, project, client):
        existing = Document(id="doc-5", project=project).bind_client(client)

        translator.push(article, existing)

        method, path, _ = api.requests[0]
        assert (method, path) == ("PUT", "/v1/clients/projects/project-1/documents/doc-5")

    def test_push_unmapped_subject(self, translator):
        with pytest.raises(MappingNotFoundException):
            translator.push(object())

    def test_push_mapped_but_no_adapter(self, project, client):
        translator = Translator(
            [],
            ArrayBasedMappingProvider({Article: ["title"]}),
            DefaultDocumentFactory(client=client, project=project)
        )

        with pytest.raises(InvalidArgumentException, match="No adapter found for"):
            translator.push(Article(3))

    def test_full_lifecycle(self, translator, api, article, products):
        """push → レビュー → compare → complete で翻訳が反映される"""
        document = translator.push(article)

        # 翻訳者の作業がレビュー待ちになった状態
        document.status = DocumentStatus.IN_REVIEW
        document.author_work = {"title": "Hello", "body": "The world"}

        comparison = translator.compare(document)
        assert comparison.properties["title"].original == "Bonjour"
        assert comparison.properties["title"].translated == "Hello"

        result = translator.complete(document, "positive")

        assert result is article
        assert article.title == "Hello"
        assert article.body == "The world"
        assert document.status == DocumentStatus.COMPLETED
        method, path, body = api.requests[-1]
        assert path == "/v1/clients/projects/project-1/documents/doc-100/complete"
        assert body == {"satisfaction": "positive"}

    def test_pull_product_falls_through_article_adapter(self, translator, product, project):
        """Article アダプターは型不一致で辞退し、Product アダプターが処理する"""
        document = translator.push(product, save=False)
        document.status = DocumentStatus.COMPLETED
        document.author_work = {"name": "Chair"}

        assert translator.pull(document) is product
        assert product.name == "Chair"

    def test_pull_status_error_propagates(self, translator, article):
        """状態エラーは型不一致ではないため、そのまま伝播する"""
        document = translator.push(article, save=False)

        with pytest.raises(DocumentStatusException):
            translator.pull(document)

    def test_unlinked_document(self, translator):
        document = Document(id="orphan")

        with pytest.raises(InvalidArgumentException, match='No adapter found for document "orphan".'):
            translator.pull(document)
        with pytest.raises(InvalidArgumentException, match='No subject for document "orphan"'):
            translator.get_subject_from_document(document)

    def test_deleted_subject(self, translator, article, articles):
        document = translator.push(article, save=False)
        articles.clear()

        with pytest.raises(InvalidArgumentException, match="No subject for document"):
            translator.get_subject_from_document(document)
