"""Sentiment stub for anonymous rants: deterministic lexicon score in [-1, 1] and a coarse mood label.

The score depends only on the text. It is used for display bucketing; a low
score never blocks a post.
"""

import math
import re
from typing import Literal

MoodLabel = Literal["Hopeful", "Anxious", "Stressed"]

# Normalisation constant: s / sqrt(s^2 + ALPHA) approaches +/-1 as |s| grows.
ALPHA = 15.0
NEGATION_SCALAR = -0.74
INTENSIFIER_BOOST = 0.293
NEGATION_WINDOW = 3

STRESSED_BELOW = -0.5

_TOKEN_RE = re.compile(r"[a-z]+(?:'[a-z]+)?")

NEGATORS: frozenset[str] = frozenset(
    {
        "not", "no", "never", "nothing", "nobody", "none", "nor", "cannot",
        "don't", "doesn't", "didn't", "isn't", "wasn't", "aren't", "weren't",
        "can't", "couldn't", "won't", "wouldn't", "shouldn't", "haven't", "hasn't",
    }
)

INTENSIFIERS: frozenset[str] = frozenset(
    {
        "very", "really", "so", "extremely", "totally", "completely", "incredibly",
        "absolutely", "super", "too", "deeply", "truly", "utterly", "especially",
    }
)

# Valence per word, roughly on a -3..3 scale.
LEXICON: dict[str, float] = {
    # positive
    "good": 1.9, "great": 3.1, "happy": 2.7, "glad": 2.0, "grateful": 2.5,
    "thankful": 2.3, "calm": 1.3, "relaxed": 2.2, "hopeful": 2.3, "hope": 1.9,
    "better": 1.9, "best": 3.2, "love": 3.2, "loved": 2.9, "enjoy": 2.2,
    "enjoyed": 2.3, "proud": 2.1, "support": 1.7, "supported": 1.9,
    "supportive": 2.0, "helpful": 1.8, "helped": 1.6, "kind": 2.4,
    "excited": 2.2, "peaceful": 2.2, "productive": 1.8, "progress": 1.5,
    "confident": 2.2, "fine": 0.8, "okay": 0.9, "ok": 0.9, "nice": 1.8,
    "amazing": 2.8, "awesome": 3.1, "wonderful": 2.7, "fantastic": 2.6,
    "motivated": 1.9, "energized": 1.7, "rested": 1.5, "safe": 1.9,
    "appreciated": 2.3, "appreciate": 2.0, "thanks": 1.9, "smile": 2.0,
    "laugh": 2.6, "fun": 2.3, "win": 2.8, "success": 2.7, "relief": 1.7,
    "balanced": 1.4, "improving": 1.6, "improved": 1.9, "strong": 2.3,
    # negative
    "bad": -2.5, "sad": -2.1, "angry": -2.3, "mad": -2.2, "upset": -1.6,
    "stressed": -1.9, "stress": -1.8, "stressful": -2.1, "anxious": -1.0,
    "anxiety": -1.9, "worried": -1.2, "worry": -1.5, "nervous": -1.1,
    "overwhelmed": -1.5, "overwhelming": -1.4, "tired": -1.9, "exhausted": -1.5,
    "burnout": -2.1, "burned": -1.3, "hard": -0.4, "difficult": -1.5,
    "awful": -2.0, "terrible": -2.1, "horrible": -2.5, "hate": -2.7,
    "hated": -3.2, "lonely": -2.0, "alone": -1.0, "afraid": -2.0,
    "scared": -2.2, "fear": -2.2, "frustrated": -2.4, "frustrating": -1.9,
    "annoyed": -1.6, "annoying": -1.8, "depressed": -2.3, "miserable": -2.2,
    "hopeless": -2.0, "hurt": -2.4, "pain": -2.3, "cry": -2.1, "crying": -2.1,
    "unfair": -2.1, "ignored": -1.9, "sick": -2.3, "worse": -2.1,
    "worst": -3.1, "fail": -2.5, "failed": -2.3, "failure": -2.4,
    "problem": -1.7, "problems": -1.7, "pressure": -1.2, "deadline": -0.6,
    "deadlines": -0.7, "sleepless": -1.6, "insomnia": -1.9, "panic": -2.3,
    "toxic": -2.4, "unappreciated": -1.9, "undervalued": -1.8, "drained": -1.7,
    "struggling": -2.0, "struggle": -1.9, "broken": -2.0, "useless": -1.8,
    "overworked": -1.9, "piling": -0.8, "quit": -1.2, "crisis": -3.1,
}


def tokenize(text: str) -> list[str]:
    """Lower-cased word tokens; keeps contractions such as don't."""
    return _TOKEN_RE.findall(text.lower().replace("’", "'"))


def _word_valence(tokens: list[str], i: int) -> float:
    valence = LEXICON.get(tokens[i], 0.0)
    if valence == 0.0:
        return 0.0
    if i > 0 and tokens[i - 1] in INTENSIFIERS:
        valence += INTENSIFIER_BOOST if valence > 0 else -INTENSIFIER_BOOST
    window = tokens[max(0, i - NEGATION_WINDOW):i]
    if any(t in NEGATORS or t.endswith("n't") for t in window):
        valence *= NEGATION_SCALAR
    return valence


def score_content(text: str) -> float:
    """Deterministic valence of `text` in [-1, 1]; 0.0 for empty or neutral text."""
    if not text or not text.strip():
        return 0.0
    tokens = tokenize(text)
    total = sum(_word_valence(tokens, i) for i in range(len(tokens)))
    if total == 0.0:
        return 0.0
    score = total / math.sqrt(total * total + ALPHA)
    return round(max(-1.0, min(1.0, score)), 4)


def mood_label(score: float) -> MoodLabel:
    """Bucket a score: Hopeful >= 0, Anxious in [-0.5, 0), Stressed < -0.5."""
    if score < STRESSED_BELOW:
        return "Stressed"
    if score < 0:
        return "Anxious"
    return "Hopeful"
