"""
アダプターの基底クラス
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from textmaster.exceptions import (
    DocumentStatusException,
    UnexpectedTypeException,
    type_name
)
from textmaster.models.document import Document
from textmaster.models.schemas import Comparison, PropertyComparison

logger = logging.getLogger(__name__)


class AdapterBase(ABC):
    """
    アダプターのインターフェース

    compare / complete / pull は、ドキュメントが自分の管理対象でない場合
    UnexpectedTypeException を送出すること。
    """

    @abstractmethod
    def supports(self, subject: Any) -> bool:
        """サブジェクトを扱えるか"""
        pass

    @abstractmethod
    def push(
        self,
        subject: Any,
        properties: Dict[str, Any],
        document: Document
    ) -> Document:
        """
        サブジェクトの翻訳対象プロパティをドキュメントに書き込む

        Args:
            subject: 翻訳対象のドメインオブジェクト
            properties: MappingProvider が返したプロパティ
            document: 書き込み先のドキュメント

        Returns:
            更新されたドキュメント
        """
        pass

    @abstractmethod
    def compare(self, document: Document) -> Comparison:
        pass

    @abstractmethod
    def complete(
        self,
        document: Document,
        satisfaction: Optional[str] = None,
        message: Optional[str] = None
    ) -> Any:
        pass

    @abstractmethod
    def pull(self, document: Document) -> Any:
        pass

    @abstractmethod
    def get_subject_from_document(self, document: Document) -> Optional[Any]:
        """ドキュメントに紐付くサブジェクト（無ければNone）"""
        pass


class AbstractAdapter(AdapterBase):
    """
    push / compare / complete / pull の共通処理

    サブクラスは supports, get_subject_from_document, get_subject_id を実装する。
    サブジェクトとの紐付けは custom_data の subject_type / subject_id に記録する。
    """

    @abstractmethod
    def get_subject_id(self, subject: Any) -> Any:
        """サブジェクトの識別子"""
        pass

    def push(
        self,
        subject: Any,
        properties: Dict[str, Any],
        document: Document
    ) -> Document:
        self.fail_if_does_not_support(subject)

        document.original_content = {
            name: {"original_phrase": str(value)}
            for name, value in properties.items()
            if value is not None
        }
        self.set_subject_on_document(subject, document)
        return document

    def compare(self, document: Document) -> Comparison:
        subject = self.get_supported_subject(document)

        try:
            translated = document.get_translated_content()
        except DocumentStatusException:
            translated = {}

        properties = {}
        for name in document.original_content:
            current = getattr(subject, name, None)
            properties[name] = PropertyComparison(
                original=None if current is None else str(current),
                translated=translated.get(name)
            )

        project = document.project
        return Comparison(
            document_id=document.id,
            language_from=project.language_from if project else None,
            language_to=project.language_to if project else None,
            properties=properties
        )

    def complete(
        self,
        document: Document,
        satisfaction: Optional[str] = None,
        message: Optional[str] = None
    ) -> Any:
        self.get_supported_subject(document)
        document.complete(satisfaction, message)
        return self.pull(document)

    def pull(self, document: Document) -> Any:
        subject = self.get_supported_subject(document)

        # 送信したフィールド以外はサブジェクトに書き込まない
        for name, value in document.get_translated_content().items():
            if name in document.original_content:
                setattr(subject, name, value)
            else:
                logger.warning(
                    f"Ignoring unknown translated field {name!r} "
                    f"for document {document.id}"
                )

        return subject

    def set_subject_on_document(self, subject: Any, document: Document):
        """サブジェクトの型とIDをドキュメントに記録"""
        document.custom_data = {
            **document.custom_data,
            "subject_type": type_name(subject),
            "subject_id": self.get_subject_id(subject),
        }

    def get_supported_subject(self, document: Document) -> Any:
        """
        ドキュメントからサブジェクトを取得し、扱えない場合は型不一致とする
        """
        subject = self.get_subject_from_document(document)
        if subject is None:
            raise UnexpectedTypeException(
                document,
                self.describe_supported(),
                details={
                    "document_id": document.id,
                    "subject_type": document.custom_data.get("subject_type"),
                }
            )
        self.fail_if_does_not_support(subject)
        return subject

    def fail_if_does_not_support(self, subject: Any):
        if not self.supports(subject):
            raise UnexpectedTypeException(subject, self.describe_supported())

    def describe_supported(self) -> str:
        return type(self).__name__
