"""Canned replies of the ATRI persona, chosen by message text and hour of day."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

INSULT_PRIORITY_KEYWORDS = (
    "草你妈", "操你妈", "脑瘫", "废柴", "fw", "five", "废物",
    "战斗", "爬", "爪巴", "sb", "SB", "傻B",
)
LOVE_WORDS = frozenset(
    {"喜欢", "爱你", "爱", "suki", "daisuki", "すき", "好き", "贴贴", "老婆", "亲一个", "mua"}
)
MORNING_WORDS = frozenset({"早安", "早哇", "早上好", "ohayo", "哦哈哟", "お早う", "早好", "早"})
NOON_WORDS = frozenset({"中午好", "午安", "午好"})
NIGHT_WORDS = frozenset({"晚安", "oyasuminasai", "おやすみなさい", "晚好", "晚上好"})
PRAISE_KEYWORDS = ("高性能", "太棒了", "すごい", "sugoi", "斯国一", "よかった")
COMFORT_KEYWORDS = ("没事", "没关系", "大丈夫", "还好", "不要紧", "没出大问题", "没伤到哪")
ASK_KEYWORDS = ("好吗", "是吗", "行不行", "能不能", "可不可以")
QUESTION_MARKS = frozenset({"？", "?", "¿"})

ROBOT_TEXTS = ("萝卜子是对机器人的蔑称！", "是亚托莉......萝卜子可是对机器人的蔑称")
ROBOT_RECORDS = ("RocketPunch.amr",)
LOVE_IMAGES = ("SUKI.jpg", "SUKI1.jpg", "SUKI2.png")
INSULT_IMAGES = ("FN.jpg", "WQ.jpg", "WQ1.jpg")
ASK_IMAGES = ("YES.png", "NO.jpg")
AZ_IMAGES = ("AZ.jpg", "AZ1.jpg")
WH_IMAGES = ("WH.jpg", "WH1.jpg", "WH2.jpg", "WH3.jpg")
OUTRAGEOUS_IMAGES = ("WH.jpg",)
DONE_TEXTS = ("不许好！", "憋回去！")
QUESTION_TEXTS = ("?", "？", "嗯？", "(。´・ω・)ん?", "ん？")
PROMISE_TEXTS = ("我无法回应你的请求",)

SLEEP_TALK = (
    "zzzz......", "zzzzzzzz......", "zzz...好涩哦..zzz....",
    "别...不要..zzz..那..zzz..", "嘻嘻..zzz..呐~..zzzz..", "...zzz....哧溜哧溜....",
)
MORNING_EARLY = (
    "啊......早上好...(哈欠)", "唔......吧唧...早上...哈啊啊~~~\n早上好......",
    "早上好......", "早上好呜......呼啊啊~~~~",
    "啊......早上好。\n昨晚也很激情呢！", "吧唧吧唧......怎么了...已经早上了么...",
    "早上好！", "......看起来像是傍晚，其实已经早上了吗？", "早上好......欸~~~脸好近呢",
)
MORNING_LATE = (
    "哼！这个点还早啥，昨晚干啥去了！？", "熬夜了对吧熬夜了对吧熬夜了对吧？？？！",
    "是不是熬夜是不是熬夜是不是熬夜？！",
)
MORNING_EVENING = ("早个啥？哼唧！我都准备洗洗睡了！", "不是...你看看几点了，哼！", "晚上好哇")
NOON = (
    "午安w", "午觉要好好睡哦，ATRI会陪伴在你身旁的w",
    "嗯哼哼~睡吧，就像平常一样安眠吧~o(≧▽≦)o", "睡你午觉去！哼唧！！",
)
NIGHT_MORNING = (
    "你可猝死算了吧！", "？啊这",
    "亲，这边建议赶快去睡觉呢~~~", "不可忍不可忍不可忍！！为何这还不猝死！！",
)
NIGHT_AFTERNOON = (
    "难不成？？晚上不想睡觉？？现在休息", "就......挺离谱的...现在睡觉",
    "现在还是白天哦，睡觉还太早了",
)
NIGHT_EVENING = (
    "嗯哼哼~睡吧，就像平常一样安眠吧~o(≧▽≦)o", "......(打瞌睡)",
    "呼...呼...已经睡着了哦~...呼......", "......我、我会在这守着你的，请务必好好睡着",
)
PRAISE_TEXTS = (
    "当然，我是高性能的嘛~！", "小事一桩，我是高性能的嘛", "怎么样？还是我比较高性能吧？",
    "哼哼！我果然是高性能的呢！", "因为我是高性能的嘛！嗯哼！", "因为我是高性能的呢！",
    "哎呀~，我可真是太高性能了", "正是，因为我是高性能的", "是的。我是高性能的嘛♪",
    "毕竟我可是高性能的！", "嘿嘿，我的高性能发挥出来啦♪", "我果然是很高性能的机器人吧！",
    "是吧！谁叫我这么高性能呢！哼哼！", "交给我吧，有高性能的我陪着呢",
    "呣......我的高性能，毫无遗憾地施展出来了......",
)
COMFORT_TEXTS = (
    "当然，我是高性能的嘛~！", "没事没事，因为我是高性能的嘛！嗯哼！",
    "没事的，因为我是高性能的呢！", "正是，因为我是高性能的", "是的。我是高性能的嘛♪",
    "毕竟我可是高性能的！", "那种程度的事不算什么的。\n别看我这样，我可是高性能的",
    "没问题的，我可是高性能的",
)


class ReplyKind(Enum):
    TEXT = "text"
    IMAGE = "image"
    RECORD = "record"


@dataclass(frozen=True)
class Reply:
    """One reply: a text, or the file name of an image or voice record."""

    kind: ReplyKind
    content: str
    quote: bool = False


def _text(rng: random.Random, texts: Sequence[str], quote: bool = False) -> Reply:
    return Reply(ReplyKind.TEXT, rng.choice(texts), quote)


def _image(rng: random.Random, files: Sequence[str]) -> Reply:
    return Reply(ReplyKind.IMAGE, rng.choice(files))


def _record(rng: random.Random, files: Sequence[str]) -> Reply:
    return Reply(ReplyKind.RECORD, rng.choice(files))


def is_awake(hour: int) -> bool:
    """ATRI sleeps from 1 to 6 o'clock and answers nothing then."""
    return not 1 <= hour < 6


def morning_reply(hour: int, rng: random.Random) -> Reply | None:
    if hour < 6:
        texts = SLEEP_TALK
    elif hour < 9:
        texts = MORNING_EARLY
    elif hour < 18:
        texts = MORNING_LATE
    elif hour < 24:
        texts = MORNING_EVENING
    else:
        return None
    return _text(rng, texts, quote=True)


def noon_reply(hour: int, rng: random.Random) -> Reply | None:
    if 11 < hour < 15:
        return _text(rng, NOON, quote=True)
    return None


def night_reply(hour: int, rng: random.Random) -> Reply | None:
    if hour < 6:
        texts = SLEEP_TALK
    elif hour < 11:
        texts = NIGHT_MORNING
    elif hour < 15:
        texts = NOON
    elif hour < 19:
        texts = NIGHT_AFTERNOON
    elif hour < 24:
        texts = NIGHT_EVENING
    else:
        return None
    return _text(rng, texts, quote=True)


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def respond(text: str, hour: int, to_me: bool, rng: random.Random | None = None) -> Reply | None:
    """The reply to a message, or None when ATRI stays silent."""
    rng = rng or random.Random()
    awake = is_awake(hour)

    if awake and to_me and _contains_any(text, INSULT_PRIORITY_KEYWORDS):
        return _image(rng, INSULT_IMAGES)
    if awake and text == "萝卜子":
        if rng.randrange(2) == 0:
            return _text(rng, ROBOT_TEXTS)
        return _record(rng, ROBOT_RECORDS)
    if awake and to_me and text in LOVE_WORDS:
        return _image(rng, LOVE_IMAGES)
    if text in MORNING_WORDS:
        return morning_reply(hour, rng)
    if text in NOON_WORDS:
        return noon_reply(hour, rng)
    if text in NIGHT_WORDS:
        return night_reply(hour, rng)
    if not awake:
        return None
    if to_me and _contains_any(text, PRAISE_KEYWORDS):
        return _text(rng, PRAISE_TEXTS)
    if to_me and _contains_any(text, COMFORT_KEYWORDS):
        return _text(rng, COMFORT_TEXTS)
    if _contains_any(text, ASK_KEYWORDS):
        return _image(rng, ASK_IMAGES) if rng.randrange(2) == 0 else None
    if "啊这" in text:
        return _image(rng, AZ_IMAGES) if rng.randrange(2) == 0 else None
    if "我好了" in text:
        return _text(rng, DONE_TEXTS, quote=True)
    if text in QUESTION_MARKS:
        return _question(rng, WH_IMAGES)
    if "离谱" in text:
        return _question(rng, OUTRAGEOUS_IMAGES)
    if to_me and "答应我" in text:
        return _text(rng, PROMISE_TEXTS)
    return None


def _question(rng: random.Random, images: Sequence[str]) -> Reply | None:
    roll = rng.randrange(5)
    if roll == 0:
        return _text(rng, QUESTION_TEXTS)
    if roll in (1, 2):
        return _image(rng, images)
    return None