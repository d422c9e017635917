# config.py
import os

# 正确答案标记（✔ + 变体选择符 U+FE0F）
CORRECT_MARKER = "\u2714\ufe0f"

# 解析文本中需要跳过的引导语（小写比较）
SKIP_PREFIXES = (
    "read the story",
    "read about",
    "find out",
    "click here",
    "here are",
    "read a short",
)

OPTION_COUNT = 4

EXPLANATION_MAX_CHARS = 240
EXPLANATION_TARGET_CHARS = 120

DEFAULT_TOPIC = "Islam 101"
ALL_TOPICS = "All Topics"

# 题库缓存有效期（秒）
CACHE_SECONDS = 5 * 60

LOG_LEVEL = os.environ.get("QUIZ_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
