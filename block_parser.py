# block_parser.py
import logging
import re
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple

from docx import Document

from config import (
    CORRECT_MARKER,
    DEFAULT_TOPIC,
    EXPLANATION_MAX_CHARS,
    EXPLANATION_TARGET_CHARS,
    OPTION_COUNT,
    SKIP_PREFIXES,
)
from models import Question

logger = logging.getLogger(__name__)

# 题号：行首可有空白，“数字 + 右括号 + 空白”，如 "  12) 题干"
block_pat = re.compile(r'^\s*\d+\)\s')
# 题干：右括号之后的全部内容
q_pat = re.compile(r'^\s*\d+\)\s*(.+)$')
# 句子边界：. ! ? 之后的空白（空白本身被丢弃）
sentence_pat = re.compile(r'(?<=[.!?])\s+')
ws_pat = re.compile(r'\s+')


class _Option(NamedTuple):
    text: str
    correct: bool


def _collapse(txt: str) -> str:
    return ws_pat.sub(' ', txt).strip()


def is_marked_correct(line: str) -> bool:
    return CORRECT_MARKER in line


def clean_option(txt: str) -> str:
    return _collapse(txt.replace(CORRECT_MARKER, ''))


def split_blocks(text: str) -> List[List[str]]:
    """按 "N) " 题号行切分为题块；第一个题号之前的内容丢弃"""
    blocks: List[List[str]] = []
    cur: Optional[List[str]] = None

    for line in text.replace('\r\n', '\n').split('\n'):
        if block_pat.match(line):
            if cur:
                blocks.append(cur)
            cur = [line]
        elif cur is not None:
            cur.append(line)

    if cur:
        blocks.append(cur)
    return blocks


def extract_options(block: List[str]) -> Optional[Tuple[str, List[_Option], List[str]]]:
    """
    取题块中题号行之后的前四个非空行作为选项。
    返回 (题干, 选项列表, 第四个选项之后的剩余行)；不足四个选项或题号行不匹配时返回 None。
    """
    if not block:
        return None
    m_q = q_pat.match(block[0])
    if not m_q:
        return None
    question = m_q.group(1).strip()

    rest = block[1:]
    raw_opts: List[str] = []
    end = len(rest)
    for i, line in enumerate(rest):
        if not line.strip():
            continue
        raw_opts.append(line)
        if len(raw_opts) == OPTION_COUNT:
            end = i + 1
            break

    if len(raw_opts) < OPTION_COUNT:
        return None

    options = [_Option(clean_option(l), is_marked_correct(l)) for l in raw_opts]
    return question, options, rest[end:]


def is_skippable_line(line: str) -> bool:
    l = line.strip()
    if not l:
        return True
    low = l.lower()
    return any(low.startswith(p) for p in SKIP_PREFIXES)


def summarize_explanation(text: str, answer: str) -> str:
    """
    将题块末尾的自由文本压缩为一行解析：
      - 去掉空行和 "Click here" 一类的引导语；
      - 按 . ! ? 切句，逐句累加，超过 240 字符前停止，达到 120 字符后停止；
      - 无可用内容时回退为 "Correct answer: {answer}."
    """
    fallback = f"Correct answer: {answer}."
    cleaned = _collapse(' '.join(l for l in text.split('\n') if not is_skippable_line(l)))
    if not cleaned:
        return fallback

    out = ''
    for s in sentence_pat.split(cleaned):
        if len((out + ' ' + s).strip()) > EXPLANATION_MAX_CHARS:
            break
        out = f"{out} {s.strip()}" if out else s.strip()
        if len(out) >= EXPLANATION_TARGET_CHARS:
            break
    return out or fallback


def emit_records(question: str, options: List[_Option], explanation_src: str,
                 topic: str = DEFAULT_TOPIC) -> List[Question]:
    """多个正确选项时拆成多条单答案题目，题干加 " (part i/n)" 后缀"""
    texts = [o.text for o in options]
    correct = [o.text for o in options if o.correct]

    if len(correct) <= 1:
        answer = correct[0] if correct else texts[0]
        return [Question(
            question=question,
            options=texts,
            answer=answer,
            topic=topic,
            explanation=summarize_explanation(explanation_src, answer),
        )]

    parts = len(correct)
    return [
        Question(
            question=f"{question} (part {i}/{parts})",
            options=list(texts),
            answer=answer,
            topic=topic,
            explanation=summarize_explanation(explanation_src, answer),
        )
        for i, answer in enumerate(correct, start=1)
    ]


def parse(raw_text: str, topic: str = DEFAULT_TOPIC) -> List[Question]:
    """纯函数：原始文本 → 题目列表。无法解析的题块直接跳过，不抛异常。"""
    if not raw_text:
        return []

    questions: List[Question] = []
    for block in split_blocks(raw_text):
        extracted = extract_options(block)
        if extracted is None:
            logger.debug("skipped malformed block: %r", block[0].strip())
            continue
        question, options, rest = extracted
        questions.extend(emit_records(question, options, '\n'.join(rest), topic))
    return questions


def read_docx_text(file_path) -> str:
    doc = Document(str(file_path))
    return '\n'.join(para.text for para in doc.paragraphs)


def parse_file(file_path, topic: str = DEFAULT_TOPIC) -> List[Question]:
    """读取 .txt 或 .docx 题库文件并解析"""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == '.txt':
        raw = path.read_text(encoding='utf-8')
    elif suffix == '.docx':
        raw = read_docx_text(path)
    else:
        raise ValueError(f"Unsupported file type: {path.suffix or path.name}. Use .txt or .docx")

    questions = parse(raw, topic)
    logger.info("parsed %d questions from %s", len(questions), path.name)
    return questions
