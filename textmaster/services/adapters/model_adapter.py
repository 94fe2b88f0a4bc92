"""
ローダー関数でサブジェクトを解決する汎用アダプター
"""
import logging
from typing import Any, Callable, Optional

from textmaster.exceptions import type_name
from textmaster.models.document import Document
from textmaster.services.adapters.base import AbstractAdapter

logger = logging.getLogger(__name__)


class ModelAdapter(AbstractAdapter):
    """
    1つのサブジェクト型（とそのサブクラス）に束縛されたアダプター

    Args:
        subject_type: 扱うサブジェクトのクラス
        loader: subject_id からサブジェクトを返す関数（見つからなければNone）
        id_attribute: サブジェクトの識別子属性名
    """

    def __init__(
        self,
        subject_type: type,
        loader: Callable[[Any], Optional[Any]],
        id_attribute: str = "id"
    ):
        self.subject_type = subject_type
        self.loader = loader
        self.id_attribute = id_attribute

    def supports(self, subject: Any) -> bool:
        return isinstance(subject, self.subject_type)

    def get_subject_id(self, subject: Any) -> Any:
        return getattr(subject, self.id_attribute)

    def get_subject_from_document(self, document: Document) -> Optional[Any]:
        stored_type = document.custom_data.get("subject_type")
        subject_id = document.custom_data.get("subject_id")

        if subject_id is None or not self._handles_type_name(stored_type):
            return None

        subject = self.loader(subject_id)
        if subject is None:
            logger.debug(
                f"{type(self).__name__}: no {stored_type} with id {subject_id}"
            )
        return subject

    def describe_supported(self) -> str:
        return type_name(self.subject_type)

    def _handles_type_name(self, stored_type: Optional[str]) -> bool:
        # サブクラスのインスタンスを push した場合も自分の管理対象とみなす
        if stored_type is None:
            return False
        if stored_type == type_name(self.subject_type):
            return True
        return any(
            stored_type == type_name(cls)
            for cls in _all_subclasses(self.subject_type)
        )


def _all_subclasses(cls: type) -> list:
    result = []
    for sub in cls.__subclasses__():
        result.append(sub)
        result.extend(_all_subclasses(sub))
    return result
