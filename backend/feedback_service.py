"""
AI feedback over today's journal entries.

Each feedback kind follows the same steps: load today's entries of the
relevant type(s) newest first, short-circuit with a fixed "no data"
answer when there are none, otherwise render them into a prompt and
return the model's four-section analysis untouched.
"""

from datetime import datetime, time

from loguru import logger
from pydantic import BaseModel, ConfigDict

import gpt_service


class _FeedbackShape(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ActivityFeedback(_FeedbackShape):
    activityPatterns: str
    timeManagement: str
    suggestions: str
    trends: str


class ThoughtsFeedback(_FeedbackShape):
    thoughtPatterns: str
    emotionalInsights: str
    suggestions: str
    trends: str


class DailyAchievements(_FeedbackShape):
    majorAchievements: str
    smallWins: str
    personalGrowth: str
    positivePatterns: str


ACTIVITY_PROMPT = """Analyze the following recent activities and provide structured feedback in Romanian about patterns, trends, and suggestions for improvement. Consider the timing, mood patterns, and nature of activities.

Recent activities:
{entries}

Please provide your analysis in Romanian, in these specific sections:
1. Tipare de Activitate și Relația cu Starea de Spirit: Analizează cum diferitele activități se corelează cu starea de spirit
2. Observații privind Managementul Timpului: Analizează tiparele de timp și programare
3. Sugestii pentru Optimizare: Oferă idei practice de îmbunătățire
4. Tendințe Notabile: Identifică orice tipare sau corelații semnificative

Keep each section concise but insightful, focusing on the most important observations. Provide ALL responses in Romanian."""

THOUGHTS_PROMPT = """Analyze the following recent thoughts and provide structured feedback in Romanian about patterns, emotional states, and insights. Consider the timing, mood patterns, and content of thoughts.

Recent thoughts:
{entries}

Please provide your analysis in Romanian, in these specific sections:
1. Tipare de Gândire: Analizează temele recurente și tiparele de gândire
2. Perspective Emoționale: Analizează stările emoționale și factorii lor declanșatori
3. Sugestii: Oferă idei practice pentru bunăstarea emoțională
4. Tendințe Notabile: Identifică orice tipare sau corelații semnificative

Keep each section concise but insightful, focusing on the most important observations. Provide ALL responses in Romanian."""

ACHIEVEMENTS_PROMPT = """Analyze the following daily activities and thoughts with an emphasis on identifying and celebrating achievements, no matter how small. Take a very positive, encouraging perspective, and help counter any negative self-talk. Consider both explicit accomplishments and implicit wins.

Daily entries:
{entries}

Please provide your analysis in Romanian, in these specific sections:
1. Realizări Importante: Identifică și subliniază realizările majore ale zilei
2. Micile Victorii: Evidențiază progresele mici dar semnificative și momentele pozitive
3. Creștere Personală: Identifică aspectele care demonstrează dezvoltare personală sau auto-îmbunătățire
4. Tipare Pozitive: Subliniază comportamentele și gândurile constructive observate

Focus on being encouraging and supportive, while maintaining honesty. Help reframe challenges as opportunities for growth. Provide ALL responses in Romanian."""

NO_ACTIVITIES = "Nu există activități de analizat pentru ziua de azi."
NO_THOUGHTS = "Nu există gânduri de analizat pentru ziua de azi."
NO_ENTRIES = "Nu există înregistrări pentru ziua de azi."


def start_of_day(now=None):
    return datetime.combine((now or datetime.now()).date(), time.min)


def fallback(output_model, message):
    """First field carries the message, the rest stay empty."""
    names = list(output_model.model_fields)
    return {name: (message if i == 0 else "") for i, name in enumerate(names)}


def describe_dated(entry):
    return f"Date: {entry['date']}, Time: {entry['time']}, Content: {entry['content']}, Mood: {entry['mood']}"


def describe_typed(entry):
    return f"Type: {entry['type']}, Time: {entry['time']}, Content: {entry['content']}, Mood: {entry['mood']}"


def build_prompt(template, entries, describe):
    return template.format(entries="\n".join(describe(e) for e in entries))


def _generate(store, entry_types, template, describe, output_model, empty_message, invoke, now):
    todays = store.list_by_type_since(entry_types, start_of_day(now)).unwrap()
    if not todays:
        return fallback(output_model, empty_message)

    logger.info("Requesting {} for {} entries", output_model.__name__, len(todays))
    return invoke(build_prompt(template, todays, describe), output_model)


def get_activity_feedback(store, invoke=gpt_service.invoke, now=None):
    return _generate(
        store, ("activity",), ACTIVITY_PROMPT, describe_dated,
        ActivityFeedback, NO_ACTIVITIES, invoke, now,
    )


def get_thoughts_feedback(store, invoke=gpt_service.invoke, now=None):
    return _generate(
        store, ("thoughts",), THOUGHTS_PROMPT, describe_dated,
        ThoughtsFeedback, NO_THOUGHTS, invoke, now,
    )


def get_daily_achievements(store, invoke=gpt_service.invoke, now=None):
    return _generate(
        store, ("activity", "thoughts"), ACHIEVEMENTS_PROMPT, describe_typed,
        DailyAchievements, NO_ENTRIES, invoke, now,
    )
