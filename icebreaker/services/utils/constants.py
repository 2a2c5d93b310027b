DEFAULT_NAME = "Professional"
DEFAULT_ROLE = "Professional"
DEFAULT_COMPANY = "Current Company"
DEFAULT_POSITION = "Position"
DEFAULT_EMPLOYER = "Company"
DEFAULT_FIELD = "their field"
DEFAULT_ORGANIZATION = "their organization"
DEFAULT_SKILLS = "diverse skills"

# Career level thresholds in years; evaluated top-down.
CAREER_LEVEL_THRESHOLDS = (
    (15.0, "executive"),
    (8.0, "senior"),
    (3.0, "mid"),
)

DAYS_PER_MONTH = 30.44

SENIOR_TITLE_KEYWORDS = ("director", "vp", "head")
ENGINEER_TITLE_KEYWORDS = ("engineer",)
MANAGER_TITLE_KEYWORDS = ("manager",)

# Bucket order matters: a skill lands in the first bucket whose keywords match.
CORE_SKILL_KEYWORDS = ("management", "leadership", "strategy", "communication", "project", "team")
TECHNICAL_SKILL_KEYWORDS = (
    "python",
    "javascript",
    "react",
    "sql",
    "aws",
    "docker",
    "kubernetes",
    "machine learning",
    "ai",
)

INDUSTRY_RULES = (
    ("company", "tech", "Technology"),
    ("company", "bank", "Finance"),
    ("title", "software", "Software Development"),
    ("title", "data", "Data Science"),
)

COMPANY_TYPE_RULES = (
    (("startup",), "Startup"),
    (("corp", "inc"), "Corporation"),
)

ROLE_TYPE_RULES = (
    ("engineer", "Engineering"),
    ("manager", "Management"),
    ("analyst", "Analysis"),
    ("director", "Leadership"),
)

DESCRIPTION_KNOWLEDGE_RULES = (
    ("fintech", "FinTech"),
    ("healthcare", "Healthcare"),
    ("e-commerce", "E-commerce"),
)

CERTIFICATION_SPECIALIZATIONS = (
    ("aws", "Cloud Computing"),
    ("pmp", "Project Management"),
    ("scrum", "Agile Methodology"),
)

INTEREST_KEYWORDS = (
    ("innovation", "Innovation"),
    ("sustainability", "Sustainability"),
    ("digital transformation", "Digital Transformation"),
)

TIER_RANK = {"high": 3, "medium": 2, "low": 1}

# Relevance scoring
SCORING_SKILL_KEYWORDS = ("python", "javascript", "management", "leadership", "data", "analysis")
ENGINEERING_TITLE_KEYWORDS = ("engineer", "developer")

FALLBACK_ICEBREAKERS = (
    "Hi! I came across your profile and would love to connect.",
    "Hello! Your background looks really interesting - would be great to network.",
    "Hi there! I'd love to learn more about your experience.",
    "Hello! Your profile caught my attention - let's connect!",
    "Hi! Would love to connect and potentially collaborate.",
)

CUSTOMIZATION_SCHEMA = {
    "type": "json_schema",
    "name": "customized_questions",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "questions": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "questionId": {"type": "integer"},
                        "customizedQuestion": {"type": "string"},
                        "relevanceScore": {"type": "number"},
                        "reasoning": {"type": "string"},
                    },
                    "required": [
                        "questionId",
                        "customizedQuestion",
                        "relevanceScore",
                        "reasoning",
                    ],
                    "additionalProperties": False,
                },
            }
        },
        "required": ["questions"],
        "additionalProperties": False,
    },
}

# Profile signals
ROLE_TYPE_KEYWORDS = (
    ("technical", ("engineer", "developer", "devops")),
    ("management", ("manager", "director", "lead")),
    ("business", ("sales", "marketing")),
)
INDUSTRY_CATEGORY_KEYWORDS = (
    ("technology", ("tech", "software")),
    ("finance", ("finance", "banking")),
    ("healthcare", ("health", "medical")),
)
# (exclusive upper bound in years, stage)
CAREER_STAGE_BOUNDS = (
    (2.0, "early"),
    (5.0, "mid"),
    (10.0, "senior"),
)
NOTABLE_COMPANIES = (
    "google",
    "microsoft",
    "apple",
    "amazon",
    "meta",
    "netflix",
    "tesla",
    "stripe",
    "uber",
    "airbnb",
)
DOMESTIC_LOCATION_KEYWORDS = ("united states", "usa")
TOP_SCHOOLS = (
    "stanford",
    "mit",
    "harvard",
    "berkeley",
    "carnegie mellon",
    "caltech",
    "princeton",
    "yale",
)
ADVANCED_DEGREE_KEYWORDS = ("master", "msc", "m.sc", "phd", "ph.d", "mba")
LEADERSHIP_TITLE_KEYWORDS = (
    "manager",
    "director",
    "vp",
    "ceo",
    "cto",
    "lead",
    "head",
    "chief",
    "senior",
)
MANAGEMENT_LEVEL_KEYWORDS = (
    ("executive", ("ceo", "cto", "vp")),
    ("senior", ("director", "senior manager")),
    ("mid", ("manager", "lead")),
)
TEAM_SIZE_KEYWORDS = (
    ("large", ("senior manager", "director")),
    ("medium", ("manager", "lead")),
)
TECHNICAL_DEPTH_KEYWORDS = (
    "programming",
    "software",
    "development",
    "python",
    "javascript",
    "java",
    "aws",
    "cloud",
    "devops",
    "machine learning",
    "data",
)
DOMAIN_EXPERTISE_KEYWORDS = (
    ("fintech", ("fintech", "finance")),
    ("healthcare", ("healthcare", "medical")),
    ("ai_ml", ("machine learning",)),
)
