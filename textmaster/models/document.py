"""
ドキュメントモデル

リモート翻訳ジョブを表す。サブジェクトへの参照は持たず、
紐付けはアダプターが custom_data に記録する。
"""
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, PrivateAttr

from textmaster.exceptions import ConfigurationException, DocumentStatusException
from textmaster.models.project import Project

logger = logging.getLogger(__name__)


class DocumentStatus:
    """ドキュメントのステータス"""
    IN_CREATION = "in_creation"
    WAITING_ASSIGNMENT = "waiting_assignment"
    IN_PROGRESS = "in_progress"
    IN_REVIEW = "in_review"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    PAUSED = "paused"
    CANCELED = "canceled"
    COPYSCAPE = "copyscape"
    COUNTING_WORDS = "counting_words"
    QUALITY_CONTROL = "quality_control"


SATISFACTIONS = ("positive", "neutral", "negative")

TRANSLATED_STATUSES = (DocumentStatus.IN_REVIEW, DocumentStatus.COMPLETED)

# save() 後にレスポンスから反映するフィールド
_REFRESHED_FIELDS = (
    "id", "title", "status", "original_content",
    "author_work", "custom_data", "word_count",
)


class Document(BaseModel):
    """翻訳ドキュメント"""
    id: Optional[str] = None
    title: Optional[str] = None
    status: str = DocumentStatus.IN_CREATION
    original_content: Dict[str, dict] = Field(default_factory=dict)
    author_work: Dict[str, str] = Field(default_factory=dict)
    custom_data: Dict[str, Any] = Field(default_factory=dict)
    project: Optional[Project] = None
    word_count: Optional[int] = None

    _client: Any = PrivateAttr(default=None)

    def bind_client(self, client) -> "Document":
        """永続化に使うAPIクライアントを設定"""
        self._client = client
        return self

    @property
    def client(self):
        return self._client

    @property
    def is_new(self) -> bool:
        return self.id is None

    def to_payload(self) -> dict:
        """作成・更新リクエストのボディ"""
        document = {
            "title": self.title,
            "original_content": self.original_content,
            "custom_data": self.custom_data,
        }
        if self.word_count is not None:
            document["word_count"] = self.word_count
        return {"document": document}

    def save(self) -> "Document":
        """
        ドキュメントをリモートに保存

        idが無ければ作成（POST）、あれば更新（PUT）し、
        レスポンスの内容で自身を更新する。

        Raises:
            ConfigurationException: クライアントまたはプロジェクトIDが未設定
        """
        client, project_id = self._require_remote()

        if self.is_new:
            data = client.create_document(project_id, self.to_payload())
            logger.info(f"Document created: {data.get('id')} (project {project_id})")
        else:
            data = client.update_document(project_id, self.id, self.to_payload())
            logger.debug(f"Document updated: {self.id}")

        self._refresh(data)
        return self

    def get_translated_content(self) -> Dict[str, str]:
        """
        翻訳済みコンテンツを取得

        Raises:
            DocumentStatusException: まだレビュー中・完了状態でない
        """
        if self.status not in TRANSLATED_STATUSES:
            raise DocumentStatusException(self.id, self.status, TRANSLATED_STATUSES)
        return dict(self.author_work)

    def complete(
        self,
        satisfaction: Optional[str] = None,
        message: Optional[str] = None
    ) -> "Document":
        """
        レビュー中のドキュメントを完了にする

        Args:
            satisfaction: positive / neutral / negative
            message: 翻訳者へのメッセージ
        """
        if self.status != DocumentStatus.IN_REVIEW:
            raise DocumentStatusException(
                self.id, self.status, (DocumentStatus.IN_REVIEW,)
            )
        if satisfaction is not None and satisfaction not in SATISFACTIONS:
            raise ValueError(
                f"Satisfaction must be one of {', '.join(SATISFACTIONS)}, "
                f"got {satisfaction!r}"
            )

        client, project_id = self._require_remote()
        data = client.complete_document(project_id, self.id, satisfaction, message)
        self._refresh(data)
        self.status = DocumentStatus.COMPLETED
        logger.info(f"Document completed: {self.id}")
        return self

    def _require_remote(self):
        if self._client is None:
            raise ConfigurationException(
                "No API client bound to document.",
                details={"document_id": self.id}
            )
        if self.project is None or self.project.id is None:
            raise ConfigurationException(
                "Document has no project id.",
                details={"document_id": self.id}
            )
        return self._client, self.project.id

    def _refresh(self, data: Optional[dict]):
        for name in _REFRESHED_FIELDS:
            if data and data.get(name) is not None:
                setattr(self, name, data[name])
