"""
マッピングプロバイダー

サブジェクトから翻訳対象プロパティを取り出す
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Union

from textmaster.exceptions import MappingNotFoundException, type_name


class MappingProviderBase(ABC):
    """マッピングプロバイダーの基底クラス"""

    @abstractmethod
    def get_properties(self, subject: Any) -> Dict[str, Any]:
        """
        翻訳対象プロパティを取得

        Args:
            subject: 翻訳対象のドメインオブジェクト（変更しないこと）

        Returns:
            フィールド名 → 値
        """
        pass


class ArrayBasedMappingProvider(MappingProviderBase):
    """
    型ごとのフィールド名リストで定義するマッピング

    使用例:
        ArrayBasedMappingProvider({Article: ["title", "body"]})
    """

    def __init__(self, mappings: Mapping[Union[type, str], Iterable[str]]):
        # キーはクラスでも完全修飾名でもよい
        self.mappings = {
            (type_name(key) if isinstance(key, type) else key): list(names)
            for key, names in mappings.items()
        }

    def get_properties(self, subject: Any) -> Dict[str, Any]:
        names = self._find_mapping(subject)
        return {name: getattr(subject, name) for name in names}

    def _find_mapping(self, subject: Any) -> list:
        # サブクラスは親クラスのマッピングを継承する
        for cls in type(subject).__mro__:
            names = self.mappings.get(type_name(cls))
            if names is not None:
                return names
        raise MappingNotFoundException(subject)
