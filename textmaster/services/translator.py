"""
トランスレーター

サブジェクトを適切なアダプターに振り分け、
ドキュメントのライフサイクル（push / compare / complete / pull）を管理
"""
import logging
from typing import Any, Iterable, Optional

from textmaster.exceptions import (
    ConfigurationException,
    InvalidArgumentException,
    UnexpectedTypeException,
    type_name
)
from textmaster.models.document import Document
from textmaster.services.adapters.base import AdapterBase
from textmaster.services.document_factory import DocumentFactoryBase
from textmaster.services.mapping_provider import MappingProviderBase

logger = logging.getLogger(__name__)


class Translator:
    """
    複数アダプターの振り分けを呼び出し側から隠す窓口

    アダプターは登録順に評価され、最初に処理できたものが採用される。
    ロックは持たないため、スレッド安全性は各コラボレーターに依存する。
    """

    def __init__(
        self,
        adapters: Iterable[AdapterBase],
        mapping_provider: MappingProviderBase,
        document_factory: Optional[DocumentFactoryBase] = None
    ):
        self.adapters = tuple(adapters)
        self.mapping_provider = mapping_provider
        self.document_factory = document_factory

    def push(
        self,
        subject: Any,
        document_or_params: Any = None,
        save: bool = True
    ) -> Document:
        """
        サブジェクトをドキュメントに書き込み、必要なら保存

        Args:
            subject: 翻訳対象のドメインオブジェクト
            document_or_params: 既存の Document、またはファクトリーに渡す生成パラメータ
            save: True の場合、アダプターが返したドキュメントを保存する

        Returns:
            アダプターが返したドキュメント

        Raises:
            ConfigurationException: 生成が必要なのにファクトリーが無い
            InvalidArgumentException: サブジェクトを扱えるアダプターが無い
        """
        document = document_or_params
        if not isinstance(document, Document):
            document = self._get_document_factory().create_document(
                subject, document_or_params
            )

        properties = self.mapping_provider.get_properties(subject)

        for adapter in self.adapters:
            if adapter.supports(subject):
                logger.debug(
                    f"Pushing {type_name(subject)} with {type(adapter).__name__}"
                )
                document = adapter.push(subject, properties, document)

                if save:
                    document.save()

                logger.info(
                    f"Pushed {type_name(subject)} to document {document.id}"
                )
                return document

        raise InvalidArgumentException(
            f'No adapter found for "{type_name(subject)}".',
            details={"subject_type": type_name(subject)}
        )

    def compare(self, document: Document) -> Any:
        """サブジェクトの現在値と翻訳結果を比較"""
        return self._dispatch("compare", document)

    def complete(
        self,
        document: Document,
        satisfaction: Optional[str] = None,
        message: Optional[str] = None
    ) -> Any:
        """ドキュメントを完了にし、翻訳結果をサブジェクトに反映"""
        return self._dispatch("complete", document, satisfaction, message)

    def pull(self, document: Document) -> Any:
        """翻訳結果をサブジェクトに反映"""
        return self._dispatch("pull", document)

    def get_subject_from_document(self, document: Document) -> Any:
        """
        ドキュメントに紐付くサブジェクトを取得

        探索的な逆引きのため、アダプターの例外はすべて握りつぶして次を試す。
        アダプター内部の本当のエラーも「見つからない」として報告される点に注意。

        Raises:
            InvalidArgumentException: どのアダプターもサブジェクトを返さなかった
        """
        for adapter in self.adapters:
            try:
                subject = adapter.get_subject_from_document(document)
            except Exception as e:
                logger.warning(
                    f"{type(adapter).__name__} failed to resolve subject "
                    f"for document {document.id}: {str(e)}"
                )
                continue

            if subject is not None:
                return subject

        raise InvalidArgumentException(
            f'No subject for document "{document.id}"',
            details={"document_id": document.id}
        )

    def _dispatch(self, operation: str, document: Document, *args) -> Any:
        # 型不一致のみ次のアダプターへ。それ以外の例外はそのまま伝播させる
        for adapter in self.adapters:
            try:
                return getattr(adapter, operation)(document, *args)
            except UnexpectedTypeException:
                logger.debug(
                    f"{type(adapter).__name__} declined {operation} "
                    f"for document {document.id}"
                )
                continue

        raise InvalidArgumentException(
            f'No adapter found for document "{document.id}".',
            details={"document_id": document.id, "operation": operation}
        )

    def _get_document_factory(self) -> DocumentFactoryBase:
        if self.document_factory is None:
            raise ConfigurationException("No document factory provided.")
        return self.document_factory
