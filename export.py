# export.py
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from block_parser import parse_file
from config import DEFAULT_TOPIC
from utils import configure_logging, save_questions


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="把 .txt / .docx 题库导出为 JSON")
    ap.add_argument("source", type=Path, help="题库文件（.txt 或 .docx）")
    ap.add_argument("-o", "--output", type=Path, help="输出 JSON 路径，缺省输出到 stdout")
    ap.add_argument("--topic", default=DEFAULT_TOPIC, help=f"题目分类（默认 {DEFAULT_TOPIC}）")
    ap.add_argument("--log-level", default=None, help="日志级别，如 DEBUG")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    ap_args = parse_args(argv)
    configure_logging(ap_args.log_level)

    try:
        questions = parse_file(ap_args.source, ap_args.topic)
    except ValueError as e:
        logging.error("%s", e)
        return 2

    if not questions:
        logging.warning("No questions parsed from %s", ap_args.source)

    if ap_args.output:
        save_questions(ap_args.output, questions)
        logging.info("Wrote %d questions to %s", len(questions), ap_args.output)
    else:
        json.dump([q.to_dict() for q in questions], sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
