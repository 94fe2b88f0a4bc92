"""
ドキュメントファクトリー
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

from textmaster.models.document import Document
from textmaster.models.project import Project


class DocumentFactoryBase(ABC):
    """ドキュメントファクトリーの基底クラス"""

    @abstractmethod
    def create_document(self, subject: Any, params: Optional[dict] = None) -> Document:
        """
        サブジェクト用の新しいドキュメントを生成

        Args:
            subject: 翻訳対象のドメインオブジェクト
            params: 生成パラメータ（title, word_count 等）

        Returns:
            未保存のドキュメント
        """
        pass


class DefaultDocumentFactory(DocumentFactoryBase):
    """既定値とパラメータから Document を組み立てるファクトリー"""

    def __init__(
        self,
        client=None,
        project: Optional[Project] = None,
        defaults: Optional[dict] = None
    ):
        self.client = client
        self.project = project
        self.defaults = defaults or {}

    def create_document(self, subject: Any, params: Optional[dict] = None) -> Document:
        if params is not None and not isinstance(params, dict):
            raise TypeError(
                f"Document params must be a dict or None, "
                f"got {type(params).__name__}"
            )

        values = {**self.defaults, **(params or {})}
        values.setdefault("title", str(subject))
        if self.project is not None:
            values.setdefault("project", self.project)

        document = Document(**values)
        if self.client is not None:
            document.bind_client(self.client)
        return document
