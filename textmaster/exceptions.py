"""
カスタム例外クラス

クライアント全体で使用する例外を定義
"""
from typing import Any, Iterable


def type_name(value: Any) -> str:
    """値の型の完全修飾名（module.QualName）"""
    cls = value if isinstance(value, type) else type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


class TextmasterException(Exception):
    """クライアント基底例外"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentException(TextmasterException):
    """処理できる対象が見つからない等、引数が不正な場合の例外"""
    pass


class ConfigurationException(InvalidArgumentException):
    """必要なコラボレーター（DocumentFactory等）が未設定の場合の例外"""
    pass


class UnexpectedTypeException(TextmasterException):
    """
    アダプターが扱わない型を受け取った場合の例外

    Translator はこの例外を「次のアダプターを試す」合図として扱う。
    """

    def __init__(self, value: Any, expected_type: Any, details: dict = None):
        expected = (
            type_name(expected_type) if isinstance(expected_type, type)
            else str(expected_type)
        )
        actual = "None" if value is None else type_name(value)
        super().__init__(
            f'Expected argument of type "{expected}", "{actual}" given',
            details
        )
        self.value = value
        self.expected_type = expected


class MappingNotFoundException(TextmasterException):
    """サブジェクトの型に対応するマッピングが定義されていない"""

    def __init__(self, subject: Any, details: dict = None):
        super().__init__(
            f'No mapping found for "{type_name(subject)}".',
            details
        )
        self.subject_type = type_name(subject)


class DocumentStatusException(TextmasterException):
    """ドキュメントの状態が操作を許可していない"""

    def __init__(
        self,
        document_id: Any,
        status: str,
        expected_statuses: Iterable[str],
        details: dict = None
    ):
        self.document_id = document_id
        self.status = status
        self.expected_statuses = list(expected_statuses)
        super().__init__(
            f'Document "{document_id}" has status "{status}", '
            f'expected one of: {", ".join(self.expected_statuses)}.',
            details
        )


class APIRateLimitException(TextmasterException):
    """APIレート制限例外"""

    def __init__(
        self,
        message: str,
        retry_after: float = None,
        details: dict = None
    ):
        super().__init__(message, details)
        self.retry_after = retry_after


class APIException(TextmasterException):
    """API呼び出し関連の例外"""

    def __init__(
        self,
        message: str,
        status_code: int = None,
        details: dict = None
    ):
        super().__init__(message, details)
        self.status_code = status_code
