import logging
import random
import sys
from pathlib import Path
from typing import List

from PyQt5.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QFileDialog, QMessageBox, QComboBox,
    QCheckBox, QGroupBox, QRadioButton, QButtonGroup
)
from PyQt5.QtGui import QFont
from PyQt5.QtCore import Qt

from bank import QuestionBank
from config import ALL_TOPICS, OPTION_COUNT
from models import Question
from utils import configure_logging, load_questions, save_questions

logger = logging.getLogger(__name__)

ALL_BANKS = "全部题库"
MODE_ORDERED = "按库顺序刷题"
MODE_SHUFFLED = "全部随机刷题"


class QuizApp(QMainWindow):
    BASE_WIDTH = 820
    BASE_HEIGHT = 620
    BASE_FONT = 12          # pt

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Quiz 刷题")
        self.resize(self.BASE_WIDTH, self.BASE_HEIGHT)

        # ----------------- 数据 -----------------
        self.bank = QuestionBank()
        self.current_questions: List[Question] = []
        self.current_index: int = 0
        self.wrong_questions: List[Question] = []
        self.correct_cnt: int = 0
        self.current_font_size = self.BASE_FONT

        self._init_ui()
        self._apply_style()
        self.adjust_ui_scaling()

    # -------------------------------------------------
    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.adjust_ui_scaling()

    def adjust_ui_scaling(self):
        """按窗口尺寸缩放字号和按钮高度"""
        factor = min(self.width() / self.BASE_WIDTH, self.height() / self.BASE_HEIGHT)
        self.current_font_size = max(8, int(self.BASE_FONT * factor))
        font = QFont()
        font.setPointSize(self.current_font_size)

        for w in (self.lbl_progress, self.lbl_question, self.lbl_feedback,
                  self.cb_bank, self.cb_topic, self.cb_mode, self.chk_wrong, *self.buttons):
            w.setFont(font)
        for rb in self.opt_radios:
            rb.setFont(font)
            rb.setStyleSheet(f"font-size: {self.current_font_size}pt; padding: 6px 12px;")

        btn_h = max(24, int(30 * factor))
        for btn in self.buttons:
            btn.setMinimumHeight(btn_h)
        self.opt_box.setMinimumHeight(btn_h * len(self.opt_radios))
        self.update()

    # -------------------------------------------------
    def _make_button(self, text: str, slot, enabled: bool = True) -> QPushButton:
        btn = QPushButton(text)
        btn.setMinimumWidth(120)
        btn.clicked.connect(slot)
        btn.setEnabled(enabled)
        self.buttons.append(btn)
        return btn

    def _init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(32, 24, 32, 24)
        main_layout.setSpacing(18)
        self.buttons: List[QPushButton] = []

        # ---------- 顶部：题库 / 分类 / 模式 ----------
        top = QHBoxLayout()
        top.setSpacing(12)
        main_layout.addLayout(top)

        self.btn_upload = self._make_button("上传题库", self.upload_bank)
        self.cb_bank = QComboBox()
        self.cb_bank.addItem(ALL_BANKS)
        self.cb_bank.currentTextChanged.connect(self.refresh_topics)
        self.cb_topic = QComboBox()
        self.cb_topic.addItem(ALL_TOPICS)
        self.cb_mode = QComboBox()
        self.cb_mode.addItems([MODE_ORDERED, MODE_SHUFFLED])
        self.chk_wrong = QCheckBox("刷错题模式")
        self.btn_start = self._make_button("开始刷题", self.start_practice)
        for w in (self.btn_upload, self.cb_bank, self.cb_topic, self.cb_mode,
                  self.chk_wrong, self.btn_start):
            top.addWidget(w)

        # ---------- 题目 ----------
        self.lbl_progress = QLabel("")
        self.lbl_progress.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(self.lbl_progress)

        self.lbl_question = QLabel("")
        self.lbl_question.setWordWrap(True)
        self.lbl_question.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.lbl_question.setMinimumHeight(60)
        main_layout.addWidget(self.lbl_question)

        # ---------- 选项：固定四个 ----------
        self.opt_group = QButtonGroup()
        self.opt_box = QGroupBox("选项")
        opt_layout = QVBoxLayout(self.opt_box)
        opt_layout.setSpacing(10)
        self.opt_radios: List[QRadioButton] = []
        for i in range(OPTION_COUNT):
            rb = QRadioButton("")
            rb.setMinimumHeight(32)
            self.opt_radios.append(rb)
            self.opt_group.addButton(rb, i)
            opt_layout.addWidget(rb)
        main_layout.addWidget(self.opt_box)

        # ---------- 操作 ----------
        row = QHBoxLayout()
        row.setSpacing(16)
        main_layout.addLayout(row)
        self.btn_submit = self._make_button("提交答案", self.check_answer)
        self.btn_next = self._make_button("下一题", self.next_question, enabled=False)
        self.btn_save_wrong = self._make_button("保存错题", self.save_current_wrong, enabled=False)
        self.btn_finish = self._make_button("结束刷题", self.finish_practice)
        for btn in (self.btn_submit, self.btn_next, self.btn_save_wrong, self.btn_finish):
            row.addWidget(btn)

        self.lbl_feedback = QLabel("")
        self.lbl_feedback.setWordWrap(True)
        self.lbl_feedback.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.lbl_feedback.setMinimumHeight(40)
        main_layout.addWidget(self.lbl_feedback)

    def _apply_style(self):
        QApplication.setStyle("Fusion")
        self.setStyleSheet("""
            QWidget { background-color: #1f2428; color: #eef1f4; }
            QGroupBox {
                background-color: #2a3036;
                border: 1px solid #3d454d;
                border-radius: 8px;
                margin-top: 12px;
                padding: 12px;
            }
            QPushButton {
                background-color: #3f8f6b;
                color: #fff;
                border: none;
                border-radius: 8px;
                padding: 10px 20px;
                margin: 4px;
            }
            QPushButton:hover { background-color: #55a983; }
            QPushButton:disabled { background-color: #444; color: #999; }
        """)

    def _html(self, body: str) -> str:
        return f'<span style="font-size:{self.current_font_size}pt">{body}</span>'

    # -------------------------------------------------
    # ---- 上传题库（.txt / .docx）----
    def upload_bank(self):
        files, _ = QFileDialog.getOpenFileNames(
            self, "选择题库文件", "", "题库文件 (*.txt *.docx)"
        )
        for f in files:
            name = Path(f).stem
            try:
                qs = self.bank.add_bank(name, f)
            except (OSError, ValueError) as e:
                logger.exception("failed to load bank %s", f)
                QMessageBox.warning(self, "错误", f"加载《{name}》时出错:\n{e}")
                continue
            if self.cb_bank.findText(name) == -1:
                self.cb_bank.addItem(name)
            self.refresh_topics()
            QMessageBox.information(self, "成功", f"已加载题库《{name}》，共 {len(qs)} 题")

    def refresh_topics(self, *_):
        current = self.cb_topic.currentText()
        if self.cb_bank.currentText() == ALL_BANKS:
            topics = self.bank.topics()
        else:
            topics = self.bank.topics(self.cb_bank.currentText())
        self.cb_topic.clear()
        self.cb_topic.addItems(topics)
        if current in topics:
            self.cb_topic.setCurrentText(current)

    def _selected_questions(self) -> List[Question]:
        topic = self.cb_topic.currentText() or ALL_TOPICS
        if self.cb_bank.currentText() == ALL_BANKS:
            return self.bank.get_by_topic(topic)
        qs = self.bank.get_by_name(self.cb_bank.currentText())
        return qs if topic == ALL_TOPICS else [q for q in qs if q.topic == topic]

    # ---- 开始刷题 ----
    def start_practice(self):
        if self.chk_wrong.isChecked():
            f, _ = QFileDialog.getOpenFileName(self, "加载错题库", "", "JSON 文件 (*.json)")
            if not f:
                return
            try:
                qs = load_questions(f)
            except (OSError, ValueError, TypeError) as e:
                QMessageBox.warning(self, "错误", f"加载错题库失败:\n{e}")
                return
            if not qs:
                QMessageBox.information(self, "提示", "错题库为空，无法开始刷题。")
                return
            self.setWindowTitle(f"Quiz 刷题 - 错题（{Path(f).name}）")
        else:
            qs = self._selected_questions()
            if not qs:
                QMessageBox.warning(self, "提示", "当前没有可用的题目，请先上传题库。")
                return
            if self.cb_mode.currentText() == MODE_SHUFFLED:
                random.shuffle(qs)

        self.current_questions = qs
        self.current_index = 0
        self.wrong_questions.clear()
        self.correct_cnt = 0
        self.show_current_question()

    def show_current_question(self):
        if self.current_index >= len(self.current_questions):
            self.finish_practice()
            return

        q = self.current_questions[self.current_index]
        self.lbl_progress.setText(f"第 {self.current_index + 1}/{len(self.current_questions)} 题 · {q.topic}")
        self.lbl_question.setText(self._html(q.question))

        # QButtonGroup 为互斥组，先关闭互斥才能清空选中
        self.opt_group.setExclusive(False)
        for i, rb in enumerate(self.opt_radios):
            rb.setChecked(False)
            if i < len(q.options):
                rb.setText(q.options[i])
                rb.show()
            else:
                rb.hide()
        self.opt_group.setExclusive(True)

        self.btn_submit.setEnabled(True)
        self.btn_next.setEnabled(False)
        self.btn_save_wrong.setEnabled(False)
        self.lbl_feedback.clear()

    # ---- 检查答案 ----
    def check_answer(self):
        selected_id = self.opt_group.checkedId()
        if selected_id == -1:
            QMessageBox.warning(self, "提示", "请先选择一个选项！")
            return

        q = self.current_questions[self.current_index]
        if selected_id >= len(q.options):
            return
        if q.is_correct(q.options[selected_id]):
            self.correct_cnt += 1
            self.lbl_feedback.setStyleSheet("color: #5cb85c;")
            self.lbl_feedback.setText(self._html(f"✅ 正确！<br>{q.explanation}"))
        else:
            self.wrong_questions.append(q)
            self.lbl_feedback.setStyleSheet("color: #d9534f;")
            self.lbl_feedback.setText(self._html(f"❌ 错误！正确答案：{q.answer}<br>{q.explanation}"))

        self.btn_submit.setEnabled(False)
        self.btn_next.setEnabled(True)
        self.btn_save_wrong.setEnabled(bool(self.wrong_questions))

    def _ask_save_wrong(self) -> None:
        f, _ = QFileDialog.getSaveFileName(self, "保存错题库", "错题库.json", "JSON 文件 (*.json)")
        if not f:
            return
        try:
            save_questions(f, self.wrong_questions)
        except OSError as e:
            QMessageBox.warning(self, "错误", f"保存失败:\n{e}")
            return
        QMessageBox.information(self, "成功", f"错题已保存至 {f}")

    def save_current_wrong(self):
        if not self.wrong_questions:
            QMessageBox.information(self, "提示", "暂无错题需要保存。")
            return
        self._ask_save_wrong()

    def next_question(self):
        self.current_index += 1
        self.show_current_question()

    # ---- 结束刷题 ----
    def finish_practice(self):
        total = len(self.current_questions)
        if total == 0:
            return
        msg = (f"本轮共 {total} 题，正确 {self.correct_cnt} 题，"
               f"正确率 {self.correct_cnt / total * 100:.2f}%<br>")
        if self.wrong_questions:
            msg += f"错题数量：{len(self.wrong_questions)}<br>是否保存错题？"
            reply = QMessageBox.question(self, "刷题结束", self._html(msg),
                                         QMessageBox.Yes | QMessageBox.No, QMessageBox.Yes)
            if reply == QMessageBox.Yes:
                self._ask_save_wrong()
        else:
            QMessageBox.information(self, "刷题结束", self._html(msg + "全部答对 🎉"))

        self.current_questions = []
        self.lbl_progress.clear()
        self.lbl_question.clear()
        self.lbl_feedback.clear()
        for rb in self.opt_radios:
            rb.hide()
        self.btn_submit.setEnabled(False)
        self.btn_next.setEnabled(False)
        self.btn_save_wrong.setEnabled(False)


def main():
    configure_logging()
    app = QApplication(sys.argv)
    window = QuizApp()
    window.show()
    sys.exit(app.exec_())

if __name__ == "__main__":
    main()
