"""
Pydantic 結果モデル
"""
from typing import Dict, Optional

from pydantic import BaseModel, Field


class PropertyComparison(BaseModel):
    """1フィールド分の比較結果"""
    original: Optional[str] = None
    translated: Optional[str] = None

    @property
    def is_translated(self) -> bool:
        return self.translated is not None


class Comparison(BaseModel):
    """サブジェクトの現在値と翻訳結果の比較"""
    document_id: Optional[str] = None
    language_from: Optional[str] = None
    language_to: Optional[str] = None
    properties: Dict[str, PropertyComparison] = Field(default_factory=dict)

    @property
    def pending_properties(self) -> list:
        """翻訳がまだ届いていないフィールド名"""
        return [
            name for name, item in self.properties.items()
            if not item.is_translated
        ]
