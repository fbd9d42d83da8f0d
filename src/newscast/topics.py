from __future__ import annotations

from newscast.models import Topic

TOPICS: list[Topic] = [
    Topic(id="technology", name="Technology", icon="🚀", color="#3B82F6", category="Tech & Science"),
    Topic(id="ai", name="AI & Machine Learning", icon="🤖", color="#8B5CF6", category="Tech & Science"),
    Topic(id="science", name="Science", icon="🔬", color="#06B6D4", category="Tech & Science"),
    Topic(id="business", name="Business & Finance", icon="📈", color="#10B981", category="Business"),
    Topic(id="startups", name="Startups", icon="💡", color="#F59E0B", category="Business"),
    Topic(id="crypto", name="Crypto & Web3", icon="💰", color="#EAB308", category="Business"),
    Topic(id="health", name="Health & Wellness", icon="💪", color="#EC4899", category="Lifestyle"),
    Topic(id="sports", name="Sports", icon="⚽", color="#EF4444", category="Entertainment"),
    Topic(id="entertainment", name="Entertainment", icon="🎬", color="#F97316", category="Entertainment"),
    Topic(id="gaming", name="Gaming", icon="🎮", color="#A855F7", category="Entertainment"),
    Topic(id="world", name="World News", icon="🌍", color="#14B8A6", category="News"),
    Topic(id="politics", name="Politics", icon="🏛️", color="#6366F1", category="News"),
]


def resolve_topics(topic_ids: list[str] | set[str]) -> list[Topic]:
    """Return the catalog topics matching *topic_ids* in catalog order.

    Unknown ids are dropped.
    """
    wanted = set(topic_ids)
    return [t for t in TOPICS if t.id in wanted]
