# models.py
from dataclasses import dataclass, field, asdict, fields
from typing import List

@dataclass
class Question:
    """单个选择题的数据结构（固定四个选项，单一答案）"""
    question: str               # 题干；多答案题拆分后带 " (part i/n)" 后缀
    options: List[str] = field(default_factory=list)   # 四个已清洗的选项
    answer: str = ""            # 正确选项的文本，通常等于 options 中的某一项
    topic: str = ""             # 题目分类
    explanation: str = ""       # 单行解析摘要
    id: str = ""                # 可选的唯一标识

    def is_correct(self, choice: str) -> bool:
        return choice.strip() == self.answer.strip()

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        """忽略未知字段，兼容旧格式 JSON"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
