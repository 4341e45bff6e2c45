from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Emotion(str, Enum):
    JOY = "기쁨"
    SADNESS = "슬픔"
    ANGER = "분노"
    SURPRISE = "놀람"
    FEAR = "두려움"
    DISGUST = "혐오"
    NEUTRAL = "중립"


class AnalysisRequest(BaseModel):
    """A validated request; built only after the text checks pass."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str
    detail_analysis: bool = Field(default=False, alias="detailAnalysis")


class MorphemeEntry(BaseModel):
    """One content word as tagged by the model."""
    model_config = ConfigDict(populate_by_name=True)

    word: str
    part_of_speech: str = Field(alias="pos")
    sentiment: Sentiment
    specific_emotion: Optional[Emotion] = None


class AnalysisResult(BaseModel):
    """The analysis object the prompt asks the model to produce."""
    morphemes: List[MorphemeEntry]
    overall_sentiment: Sentiment
    sentiment_scores: Dict[Sentiment, int]
    specific_emotion_scores: Optional[Dict[Emotion, int]] = None

    def scores_match_morphemes(self) -> bool:
        return sum(self.sentiment_scores.values()) == len(self.morphemes)
