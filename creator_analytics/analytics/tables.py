"""
Static lookup tables used by the analyzers.

Keyword lists match content text as written by creators and are kept in
the language of the creator base (Portuguese). Display strings are English.
"""

from typing import Dict, List, Tuple

from creator_analytics.models.base import ContentType, Platform

WEEKDAY_NAMES = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
]

# Topic extraction
TOPIC_SEPARATORS = ["-", ":", "|", "—"]
TOPIC_FALLBACK_LENGTH = 30

# Pattern extractor: format names and practices
FORMAT_NAMES: Dict[Platform, str] = {
    Platform.YOUTUBE: "Video",
    Platform.INSTAGRAM: "Image/Carousel",
    Platform.TIKTOK: "Short video",
    Platform.TWITTER: "Tweet",
    Platform.FACEBOOK: "Post",
    Platform.LINKEDIN: "Article",
}

FORMAT_BEST_PRACTICES: Dict[Platform, List[str]] = {
    Platform.YOUTUBE: [
        "Videos with clear, descriptive titles perform better",
        "Including relevant keywords in the description increases reach",
    ],
    Platform.INSTAGRAM: [
        "Posts with high-quality images and engaging captions perform better",
        "Using relevant hashtags increases content discovery",
    ],
    Platform.TIKTOK: [
        "Short, dynamic videos get more engagement",
        "Joining trends significantly increases reach",
    ],
    Platform.TWITTER: [
        "Concise posts with strategic hashtags receive more interactions",
        "Tweets with questions or polls generate more engagement",
    ],
}

UNIVERSAL_BEST_PRACTICE = "Publishing consistently keeps the audience engaged"

# (upper bound exclusive, label); the last bucket has no upper bound
SIZE_BUCKETS: List[Tuple[int, str]] = [
    (100, "Very short (< 100 characters)"),
    (500, "Short (100-500 characters)"),
    (1000, "Medium (500-1000 characters)"),
    (2000, "Long (1000-2000 characters)"),
]
SIZE_BUCKET_OVERFLOW = "Very long (> 2000 characters)"
UNDETERMINED_SIZE = "Undetermined"

# Style detection
STYLE_KEYWORDS: Dict[str, List[str]] = {
    "Storytelling": ["história", "quando eu"],
    "Inspirational": ["inspiração", "motivação"],
    "Call-to-Action": ["clique", "inscreva"],
}
CONCISE_STYLE = "Concise"
CONCISE_MAX_LENGTH = 500

STYLE_DESCRIPTIONS: Dict[str, str] = {
    "Storytelling": "Content told as a personal narrative",
    "Inspirational": "Content meant to motivate and inspire",
    "Concise": "Short, direct content",
    "Call-to-Action": "Content that asks the audience to act",
}

STYLE_CHARACTERISTICS: Dict[str, List[str]] = {
    "Storytelling": [
        "First-person narrative",
        "Clear beginning, middle and end",
        "Personal experiences the audience relates to",
    ],
    "Inspirational": [
        "Inspiring language",
        "Stories of overcoming obstacles and success",
        "Impactful phrases",
    ],
    "Concise": [
        "Short sentences",
        "One idea per post",
        "Easy to consume quickly",
    ],
    "Call-to-Action": [
        "Direct, clear commands",
        "Explicit next step for the audience",
        "Sense of urgency",
    ],
}

# Named content archetypes
HIGH_ENGAGEMENT_THRESHOLD = 0.05
EDUCATIONAL_TITLE_KEYWORD = "Como"
EDUCATIONAL_BODY_KEYWORD = "aprenda"

# Engagement factors
DAY_PERIODS: List[Tuple[str, List[int]]] = [
    ("Morning (6-11)", list(range(6, 12))),
    ("Afternoon (12-17)", list(range(12, 18))),
    ("Evening (18-22)", list(range(18, 23))),
    ("Night (23-5)", [23, 0, 1, 2, 3, 4, 5]),
]

LENGTH_FACTOR_BUCKETS: List[Tuple[int, str]] = [
    (100, "Very short (<100)"),
    (500, "Short (100-499)"),
    (1000, "Medium (500-999)"),
    (2000, "Long (1000-1999)"),
]
LENGTH_FACTOR_OVERFLOW = "Very long (2000+)"

IMAGE_EXTENSIONS = (".jpg", ".png", ".jpeg")
VIDEO_EXTENSIONS = (".mp4", ".mov", ".avi")

EXPLICIT_CTA_KEYWORDS = ["comente", "compartilhe", "curta", "inscreva", "clique"]

HASHTAG_PATTERN = r"#\w+"

# Recommendations
TRENDING_TOPICS: List[Tuple[str, float]] = [
    ("Artificial Intelligence", 0.85),
    ("Sustainability", 0.78),
    ("Web3", 0.72),
    ("Digital wellbeing", 0.68),
]
MAX_TRENDING_SUGGESTIONS = 2
TRENDING_REACH = "High (rising trend)"

IDEAL_FORMATS: Dict[Platform, str] = {
    Platform.YOUTUBE: "Long video (8-15 minutes)",
    Platform.TIKTOK: "Vertical short video (15-60 seconds)",
    Platform.INSTAGRAM: "Carousel with 5-7 slides",
    Platform.TWITTER: "Thread with 3-5 tweets",
    Platform.FACEBOOK: "Post with text and image",
    Platform.LINKEDIN: "Article with 800-1200 words",
}
DEFAULT_IDEAL_FORMAT = "Mixed format (text and media)"

IDEAL_LENGTH_BUCKETS: List[Tuple[int, str]] = [
    (100, "Very short"),
    (500, "Short"),
    (1000, "Medium"),
    (2000, "Long"),
]
IDEAL_LENGTH_OVERFLOW = "Very long"
DEFAULT_IDEAL_LENGTH = "Medium"

RECOMMENDATION_CTA_KEYWORDS = ["comente", "compartilhe"]
STORYTELLING_KEYWORDS = ["quando eu", "minha experiência", "aconteceu"]
STORYTELLING_MIN_LENGTH = 1000

# Content type comparison
CONTENT_TYPE_NAMES: Dict[Platform, str] = {
    Platform.YOUTUBE: "Video",
    Platform.INSTAGRAM: "Image",
    Platform.TWITTER: "Short text",
    Platform.FACEBOOK: "Social post",
    Platform.LINKEDIN: "Professional article",
    Platform.TIKTOK: "Short video",
    Platform.PINTEREST: "Pin",
}
DEFAULT_CONTENT_TYPE = "General content"

# Performance prediction
PLATFORM_REACH_MULTIPLIERS: Dict[Platform, float] = {
    Platform.YOUTUBE: 1.2,
    Platform.TIKTOK: 1.3,
    Platform.INSTAGRAM: 1.1,
    Platform.TWITTER: 0.9,
}

CONTENT_TYPE_REACH_MULTIPLIERS: Dict[ContentType, float] = {
    ContentType.VIDEO: 1.3,
    ContentType.SOCIAL_MEDIA: 1.1,
    ContentType.BLOG: 0.9,
}

PLATFORM_VIRAL_MULTIPLIERS: Dict[Platform, float] = {
    Platform.TIKTOK: 1.3,
    Platform.INSTAGRAM: 1.2,
}
VIDEO_VIRAL_MULTIPLIER = 1.25

# (first hour, last hour inclusive, multiplier); hours outside every range count as 1.0
HOUR_MULTIPLIERS: List[Tuple[int, int, float]] = [
    (17, 21, 1.2),
    (7, 9, 1.1),
    (12, 14, 1.15),
    (22, 23, 0.8),
    (0, 5, 0.8),
]

DAY_MULTIPLIERS: Dict[str, float] = {
    "Saturday": 1.15,
    "Sunday": 1.15,
    "Monday": 1.1,
    "Friday": 1.1,
}

LOW_ENGAGEMENT_SUGGESTIONS = [
    "Add direct questions to encourage comments",
    "Include a clear and specific call to action",
]
LOW_REACH_SUGGESTIONS = [
    "Use more popular hashtags related to your niche",
    "Publish when your audience is most active",
]
PLATFORM_PREDICTION_SUGGESTIONS: Dict[Platform, List[str]] = {
    Platform.YOUTUBE: [
        "Optimize the title and description with relevant keywords",
        "Add custom thumbnails with eye-catching text",
    ],
    Platform.INSTAGRAM: [
        "Use 5-10 relevant hashtags to maximize discovery",
        "Put a call to action in the first part of the caption",
    ],
    Platform.TIKTOK: [
        "Keep the video short and dynamic (15-30 seconds)",
        "Take advantage of trends and popular music",
    ],
    Platform.TWITTER: [
        "Include an image or GIF to increase engagement",
        "Ask a question to encourage replies",
    ],
}
FALLBACK_PREDICTION_SUGGESTIONS = [
    "Add more visual elements to increase engagement",
    "Use hashtags more relevant to your niche",
]


def bucket_label(length: int, buckets: List[Tuple[int, str]], overflow: str) -> str:
    """Return the label of the first bucket whose bound exceeds ``length``."""
    for bound, label in buckets:
        if length < bound:
            return label
    return overflow


def format_name(platform: Platform) -> str:
    return FORMAT_NAMES.get(platform, platform.value)


def content_type_name(platform: Platform) -> str:
    return CONTENT_TYPE_NAMES.get(platform, DEFAULT_CONTENT_TYPE)
