"""
プロジェクトモデル
"""
from typing import Optional

from pydantic import BaseModel


class Project(BaseModel):
    """翻訳プロジェクト（リモート側で作成済みのものを参照）"""
    id: Optional[str] = None
    name: Optional[str] = None
    language_from: str
    language_to: str
    category: Optional[str] = None
    activity: str = "translation"
