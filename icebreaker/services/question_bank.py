from collections.abc import Iterable
from random import Random
from types import MappingProxyType

from ..models import Category, ConversationStarter

CATEGORY_ORDER: tuple[Category, ...] = (
    "career_background",
    "soft_skills",
    "personality_motivation",
)

# (category, subcategory, question, tags)
_STARTERS: tuple[tuple[str, str, str, tuple[str, ...]], ...] = (
    # career_background
    ("career_background", "career_path", "What first drew you to your career path?", ("career", "early_career", "growth")),
    ("career_background", "career_path", "What was the most unexpected turn in your career so far?", ("career", "senior", "growth")),
    ("career_background", "career_path", "If you could give advice to yourself at the start of your career, what would it be?", ("career", "mentorship", "senior")),
    ("career_background", "career_path", "What made you decide to move into your current role?", ("career", "growth", "management")),
    ("career_background", "career_path", "How did your background shape the way you approach your work today?", ("career", "education", "learning")),
    ("career_background", "career_path", "Which role taught you the most, and why?", ("career", "learning", "growth")),
    ("career_background", "current_role", "What does a typical week look like in your role?", ("career", "early_career", "team")),
    ("career_background", "current_role", "What part of your work gets you most excited right now?", ("career", "motivation")),
    ("career_background", "current_role", "What is a project at your company you are especially proud of?", ("career", "achievement", "technology")),
    ("career_background", "current_role", "What is the biggest challenge in your job these days?", ("career", "challenges", "strategy")),
    ("career_background", "current_role", "How has your role changed since you started?", ("career", "growth", "senior")),
    ("career_background", "industry", "What trend in your industry are you watching most closely?", ("industry", "technology", "strategy")),
    ("career_background", "industry", "How do you see your industry changing over the next five years?", ("industry", "strategy", "senior")),
    ("career_background", "industry", "What is something outsiders usually misunderstand about your industry?", ("industry", "finance")),
    ("career_background", "industry", "Which regulations or market shifts have affected your work the most?", ("industry", "finance", "strategy")),
    ("career_background", "industry", "How is new technology reshaping the way your company operates?", ("industry", "technology", "technical")),
    ("career_background", "technical", "What tools or technologies could you not do your job without?", ("technical", "skills", "technology")),
    ("career_background", "technical", "What is the most interesting technical problem you have solved recently?", ("technical", "skills", "achievement")),
    ("career_background", "technical", "How do you keep your skills sharp as the tech landscape shifts?", ("technical", "skills", "learning")),
    ("career_background", "technical", "What architecture or design decision are you glad you made?", ("technical", "senior", "strategy")),
    ("career_background", "technical", "Which programming language or framework has surprised you the most?", ("technical", "technology", "early_career")),
    ("career_background", "technical", "How do you decide when to adopt a new tool on your team?", ("technical", "team", "leadership")),
    ("career_background", "education", "How much of what you studied still shows up in your day-to-day work?", ("education", "learning", "early_career")),
    ("career_background", "education", "What is the best course or certification you have taken since school?", ("education", "learning", "skills")),
    ("career_background", "education", "Was there a professor or mentor who changed your career direction?", ("education", "mentorship")),
    ("career_background", "achievements", "What accomplishment in your career are you proudest of?", ("achievement", "career", "senior")),
    ("career_background", "achievements", "What is a recent win that did not get the recognition it deserved?", ("achievement", "team")),
    ("career_background", "achievements", "What project would you put at the top of your portfolio?", ("achievement", "skills", "technical")),
    ("career_background", "transitions", "What was the hardest part of switching companies or teams?", ("transitions", "growth", "career")),
    ("career_background", "transitions", "What did you carry over from your previous role that turned out to be invaluable?", ("transitions", "skills", "career")),
    # soft_skills
    ("soft_skills", "leadership", "How would you describe your leadership style?", ("leadership", "management", "senior")),
    ("soft_skills", "leadership", "What is the best leadership lesson you learned the hard way?", ("leadership", "learning", "senior")),
    ("soft_skills", "leadership", "How do you build trust with a team you just inherited?", ("leadership", "management", "team")),
    ("soft_skills", "leadership", "How do you balance hands-on work with leading others?", ("leadership", "technical", "management")),
    ("soft_skills", "leadership", "What leader has influenced your career the most?", ("leadership", "mentorship", "career")),
    ("soft_skills", "management", "How do you keep a team motivated through a difficult stretch?", ("management", "team", "leadership")),
    ("soft_skills", "management", "How do you approach giving difficult feedback?", ("management", "communication", "leadership")),
    ("soft_skills", "management", "What do you look for when you hire someone for your team?", ("management", "team", "senior")),
    ("soft_skills", "management", "How do you decide what your team should not work on?", ("management", "strategy", "senior")),
    ("soft_skills", "communication", "How do you explain complex ideas to non-experts?", ("communication", "technical", "skills")),
    ("soft_skills", "communication", "What is your approach to running a meeting people actually want to attend?", ("communication", "team", "management")),
    ("soft_skills", "communication", "How do you handle disagreements with stakeholders?", ("communication", "leadership", "strategy")),
    ("soft_skills", "communication", "Which of your skills do colleagues rely on you for the most?", ("communication", "skills", "team")),
    ("soft_skills", "collaboration", "What makes a cross-functional team work well in your experience?", ("collaboration", "team", "management")),
    ("soft_skills", "collaboration", "How do you collaborate with teams in different time zones?", ("collaboration", "team", "technology")),
    ("soft_skills", "collaboration", "Who is the best collaborator you have worked with, and what made them great?", ("collaboration", "team")),
    ("soft_skills", "problem_solving", "How do you approach a problem you have never seen before?", ("problem_solving", "skills", "technical")),
    ("soft_skills", "problem_solving", "Tell me about a time a plan fell apart. How did you recover?", ("problem_solving", "leadership", "challenges")),
    ("soft_skills", "problem_solving", "How do you make decisions when the data is incomplete?", ("problem_solving", "strategy", "finance")),
    ("soft_skills", "mentorship", "What is the most valuable thing you have learned from mentoring others?", ("mentorship", "leadership", "senior")),
    ("soft_skills", "mentorship", "What advice would you give someone trying to grow their skills early on?", ("mentorship", "early_career", "skills")),
    ("soft_skills", "mentorship", "How did you find mentors early in your career?", ("mentorship", "early_career", "growth")),
    ("soft_skills", "adaptability", "How do you stay productive when priorities keep shifting?", ("adaptability", "skills", "growth")),
    ("soft_skills", "adaptability", "What change at your company did you initially resist but now appreciate?", ("adaptability", "growth", "senior")),
    ("soft_skills", "time_management", "How do you protect time for deep work?", ("time_management", "skills", "technical")),
    ("soft_skills", "time_management", "What habit has made the biggest difference to your productivity?", ("time_management", "growth", "early_career")),
    ("soft_skills", "negotiation", "What is the most important thing you have learned about negotiating?", ("negotiation", "finance", "strategy")),
    ("soft_skills", "emotional_intelligence", "How do you read the room when you join a new team?", ("emotional_intelligence", "team", "leadership")),
    # personality_motivation
    ("personality_motivation", "motivation", "What keeps you motivated in your work day to day?", ("motivation", "career")),
    ("personality_motivation", "motivation", "What would you be doing if you were not in your current career?", ("motivation", "career", "fun")),
    ("personality_motivation", "motivation", "What problem in the world would you most like to help solve?", ("motivation", "values", "strategy")),
    ("personality_motivation", "motivation", "What does success look like for you in the next few years?", ("motivation", "growth", "strategy")),
    ("personality_motivation", "values", "What values guide the way you make career decisions?", ("values", "career", "senior")),
    ("personality_motivation", "values", "What kind of company culture brings out your best work?", ("values", "team", "culture")),
    ("personality_motivation", "values", "What is a professional principle you will not compromise on?", ("values", "leadership")),
    ("personality_motivation", "learning", "What are you learning about right now outside of work?", ("learning", "growth", "fun")),
    ("personality_motivation", "learning", "What book or podcast has changed how you think about your work?", ("learning", "growth")),
    ("personality_motivation", "learning", "Which new skill are you most excited to pick up this year?", ("learning", "skills", "early_career")),
    ("personality_motivation", "learning", "What emerging technology are you most curious about?", ("learning", "technology", "technical")),
    ("personality_motivation", "inspiration", "Who inspires you in your field, and why?", ("inspiration", "mentorship")),
    ("personality_motivation", "inspiration", "What was the moment you knew you had chosen the right career?", ("inspiration", "career", "early_career")),
    ("personality_motivation", "inspiration", "What is the best piece of career advice you have ever received?", ("inspiration", "mentorship", "career")),
    ("personality_motivation", "work_style", "Are you more energized by starting projects or finishing them?", ("work_style", "fun")),
    ("personality_motivation", "work_style", "What does your ideal workday look like?", ("work_style", "culture")),
    ("personality_motivation", "work_style", "How do you recharge after an intense stretch of work?", ("work_style", "wellbeing")),
    ("personality_motivation", "goals", "What is one goal you are working toward this year?", ("goals", "growth")),
    ("personality_motivation", "goals", "Where do you hope to take your career over the next decade?", ("goals", "career", "early_career")),
    ("personality_motivation", "goals", "What legacy would you like to leave at your company?", ("goals", "senior", "leadership")),
    ("personality_motivation", "interests", "What do you enjoy doing when you are not working?", ("interests", "fun")),
    ("personality_motivation", "interests", "Is there a side project you are passionate about?", ("interests", "technical", "fun")),
    ("personality_motivation", "interests", "What cause or community do you care most about?", ("interests", "values", "community")),
)


class QuestionBank:
    """Immutable catalog of conversation starter templates.

    Built once and shared; lookups never mutate state and are safe for
    unsynchronized concurrent reads.
    """

    def __init__(self, starters: Iterable[ConversationStarter]) -> None:
        ordered = tuple(starters)
        by_id: dict[int, ConversationStarter] = {}
        for starter in ordered:
            if starter.id in by_id:
                raise ValueError(f"duplicate conversation starter id {starter.id}")
            by_id[starter.id] = starter
        self._starters = ordered
        self._by_id = MappingProxyType(by_id)
        by_category: dict[str, tuple[ConversationStarter, ...]] = {}
        for category in CATEGORY_ORDER:
            by_category[category] = tuple(s for s in ordered if s.category == category)
        self._by_category = MappingProxyType(by_category)

    def __len__(self) -> int:
        return len(self._starters)

    def __iter__(self):
        return iter(self._starters)

    def all(self) -> tuple[ConversationStarter, ...]:
        return self._starters

    def get(self, question_id: int) -> ConversationStarter | None:
        return self._by_id.get(question_id)

    def by_category(self, category: str) -> tuple[ConversationStarter, ...]:
        if category not in self._by_category:
            raise ValueError(f"unknown category: {category!r}")
        return self._by_category[category]

    def by_tags(self, tags: Iterable[str]) -> tuple[ConversationStarter, ...]:
        wanted = {tag.strip().lower() for tag in tags if tag and tag.strip()}
        return tuple(s for s in self._starters if s.tags & wanted)

    def by_subcategory(self, subcategory: str) -> tuple[ConversationStarter, ...]:
        wanted = (subcategory or "").strip().lower()
        return tuple(s for s in self._starters if s.subcategory == wanted)

    def random_sample(
        self,
        count: int,
        exclude_ids: Iterable[int],
        rng: Random,
    ) -> list[ConversationStarter]:
        excluded = set(exclude_ids)
        available = [s for s in self._starters if s.id not in excluded]
        if count <= 0 or not available:
            return []
        return rng.sample(available, min(count, len(available)))


def build_default_starters() -> tuple[ConversationStarter, ...]:
    return tuple(
        ConversationStarter(
            id=index,
            category=category,
            subcategory=subcategory,
            question=question,
            tags=frozenset(tags),
        )
        for index, (category, subcategory, question, tags) in enumerate(_STARTERS, start=1)
    )


DEFAULT_QUESTION_BANK = QuestionBank(build_default_starters())
