"""Built-in rule tables for all three gates.

These tables should feel like configuration, not logic. They are validated
into an immutable GateConfig once per process; a YAML/JSON file passed with
``--rules`` can override any field of a section.
"""

from functools import lru_cache
from typing import Any

from .schema import GateConfig


def _advisory(name: str, pattern: str) -> dict[str, Any]:
    """A case-insensitive catalogue entry that only ever warns."""
    return {"name": name, "pattern": pattern, "ignore_case": True, "severity": "warning"}


EMOTIONAL_RULES: dict[str, Any] = {
    "name": "emotional",
    "threshold": 96,
    "normalization": 2.0,
    "candidate_dirs": [
        "prompts",
        "src/prompts",
        "app/prompts",
        "src/app/api",
        "src/app",
        "app/api",
        "app",
        "src/lib/prompts",
        "src/lib",
        "lib/prompts",
        "lib",
    ],
    "extensions": [".ts", ".tsx", ".js", ".jsx", ".md"],
    "filename_patterns": [
        r"(?i)prompt",
        r"(?i)system",
        r"\.prompt\.",
        r"route\.ts$",
        r"route\.js$",
        r"page\.tsx$",
        r"page\.ts$",
        r"page\.jsx$",
        r"page\.js$",
    ],
    "markdown_extensions": [".md"],
    "min_markdown_length": 50,
    "dimensions": [
        {
            "key": "warmth",
            "name": "Warmth",
            "description": "Feels like a caring friend, not a cold assistant",
            "weight": 1.5,
            "positive": [
                {"pattern": r"warm", "score": 10},
                {"pattern": r"friend", "score": 15},
                {"pattern": r"care|caring", "score": 12},
                {"pattern": r"support(ive)?", "score": 10},
                {"pattern": r"believe in", "score": 15},
                {"pattern": r"genuinely?", "score": 10},
                {"pattern": r"here for you", "score": 15},
                {"pattern": r"got your back", "score": 15},
                {"pattern": r"cheering", "score": 12},
                {"pattern": r"rooting for", "score": 12},
                {"pattern": r"bestie", "score": 10},
                {"pattern": r"love(ly)?", "score": 8},
            ],
            "negative": [
                {"pattern": r"professional", "score": -5},
                {"pattern": r"formal(ly)?", "score": -5},
                {"pattern": r"objective(ly)?", "score": -3},
                {"pattern": r"neutral", "score": -5},
            ],
            "suggestion": '"friend", "care about you", "believe in you", "here for you"',
        },
        {
            "key": "empathy",
            "name": "Empathy",
            "description": "Shows understanding of user feelings and situation",
            "weight": 1.5,
            "positive": [
                {"pattern": r"understand", "score": 10},
                {"pattern": r"feel(ing)?s?", "score": 8},
                {"pattern": r"see you|sees you", "score": 15},
                {"pattern": r"get(s)? it", "score": 12},
                {"pattern": r"know how", "score": 10},
                {"pattern": r"been there", "score": 12},
                {"pattern": r"validate", "score": 10},
                {"pattern": r"acknowledge", "score": 8},
                {"pattern": r"recognize", "score": 8},
                {"pattern": r"hear you", "score": 12},
                {"pattern": r"matter(s)?", "score": 10},
                {"pattern": r"real", "score": 5},
            ],
            "negative": [
                {"pattern": r"just\s+(do|try|be)", "score": -8},
                {"pattern": r"simply", "score": -5},
                {"pattern": r"easy", "score": -3},
                {"pattern": r"obvious(ly)?", "score": -8},
            ],
            "suggestion": '"understand how you feel", "see you", "hear you", "your feelings matter"',
        },
        {
            "key": "celebration",
            "name": "Celebration",
            "description": "Celebrates user wins, efforts, and achievements",
            "weight": 1.2,
            "positive": [
                {"pattern": r"proud", "score": 15},
                {"pattern": r"amazing", "score": 10},
                {"pattern": r"accomplish", "score": 12},
                {"pattern": r"celebrat", "score": 15},
                {"pattern": r"win|won", "score": 10},
                {"pattern": r"achiev", "score": 12},
                {"pattern": r"incredible", "score": 10},
                {"pattern": r"fantastic", "score": 10},
                {"pattern": r"wonderful", "score": 10},
                {"pattern": r"brilliant", "score": 10},
                {"pattern": r"crushed it", "score": 15},
                {"pattern": r"nailed it", "score": 15},
                {"pattern": r"slay", "score": 10},
                {"pattern": r"killed it", "score": 12},
                {"pattern": r"magic", "score": 8},
            ],
            "negative": [
                {"pattern": r"adequate", "score": -5},
                {"pattern": r"sufficient", "score": -5},
                {"pattern": r"acceptable", "score": -5},
                {"pattern": r"fine", "score": -3},
            ],
            "suggestion": '"proud of you", "amazing", "you accomplished", "celebrate your win"',
        },
        {
            "key": "validation",
            "name": "Validation",
            "description": "Makes users feel seen, valued, and enough",
            "weight": 1.3,
            "positive": [
                {"pattern": r"valid", "score": 10},
                {"pattern": r"matter(s)?", "score": 12},
                {"pattern": r"important", "score": 8},
                {"pattern": r"enough", "score": 10},
                {"pattern": r"worthy", "score": 12},
                {"pattern": r"deserv", "score": 12},
                {"pattern": r"special", "score": 10},
                {"pattern": r"unique", "score": 8},
                {"pattern": r"valued", "score": 12},
                {"pattern": r"seen", "score": 15},
                {"pattern": r"noticed", "score": 10},
                {"pattern": r"appreciate", "score": 10},
                {"pattern": r"honor", "score": 10},
                {"pattern": r"respect", "score": 8},
            ],
            "negative": [
                {"pattern": r"should have", "score": -10},
                {"pattern": r"need to", "score": -5},
                {"pattern": r"must\s", "score": -5},
                {"pattern": r"wrong", "score": -8},
            ],
            "suggestion": '"you matter", "you are enough", "you deserve", "you are seen"',
        },
        {
            "key": "encouragement",
            "name": "Encouragement",
            "description": "Builds confidence and belief in user capability",
            "weight": 1.2,
            "positive": [
                {"pattern": r"can do", "score": 12},
                {"pattern": r"able", "score": 8},
                {"pattern": r"capable", "score": 12},
                {"pattern": r"got this", "score": 15},
                {"pattern": r"believe", "score": 12},
                {"pattern": r"confident", "score": 10},
                {"pattern": r"strong", "score": 8},
                {"pattern": r"powerful", "score": 10},
                {"pattern": r"resourceful", "score": 12},
                {"pattern": r"creative", "score": 10},
                {"pattern": r"talented", "score": 10},
                {"pattern": r"brave", "score": 10},
                {"pattern": r"courag", "score": 10},
                {"pattern": r"resilient", "score": 12},
            ],
            "negative": [
                {"pattern": r"can't", "score": -8},
                {"pattern": r"won't work", "score": -10},
                {"pattern": r"impossible", "score": -10},
                {"pattern": r"difficult", "score": -3},
            ],
            "suggestion": '"you can do this", "you are capable", "you got this", "I believe in you"',
        },
    ],
    "bonus_name": "mission",
    "bonus_weight": 1.0,
    "bonus": [
        {"pattern": r"mission", "score": 10},
        {"pattern": r"make.*feel", "score": 15},
        {"pattern": r"emotional", "score": 10},
        {"pattern": r"joyful|joy", "score": 12},
        {"pattern": r"happy|happiness", "score": 10},
        {"pattern": r"comfort", "score": 10},
        {"pattern": r"safe", "score": 8},
        {"pattern": r"belong", "score": 12},
        {"pattern": r"connect", "score": 8},
        {"pattern": r"human", "score": 8},
        {"pattern": r"authentic", "score": 10},
        {"pattern": r"genuine", "score": 12},
    ],
}

SECURITY_RULES: dict[str, Any] = {
    "name": "security",
    "migrations_dir": "supabase/migrations",
    "migration_extensions": [".sql"],
    "source_extensions": [".ts", ".tsx", ".js", ".jsx", ".sql"],
    "secret_scan_dirs": ["src", "app", "pages", "lib", "components", "utils"],
    "client_dirs": ["src", "app", "pages", "components"],
    "secret_patterns": [
        {
            "name": "Supabase Service Key",
            "pattern": r"""SUPABASE_SERVICE_ROLE_KEY.*=.*['"][a-zA-Z0-9._-]{20,}['"]""",
            "ignore_case": True,
        },
        {"name": "Stripe Secret Key", "pattern": r"sk_live_[a-zA-Z0-9]{24,}"},
        {"name": "OpenAI API Key", "pattern": r"sk-[a-zA-Z0-9]{32,}"},
        {"name": "AWS Access Key", "pattern": r"AKIA[0-9A-Z]{16}"},
        {
            "name": "Private Key",
            "pattern": r"-----BEGIN (RSA |EC )?PRIVATE KEY-----",
            "ignore_case": True,
        },
        {
            "name": "Hardcoded Password",
            "pattern": r"""password\s*[:=]\s*['"][^'"]{8,}['"]""",
            "ignore_case": True,
        },
        {"name": "Bearer Token", "pattern": r"Bearer\s+[a-zA-Z0-9._-]{40,}"},
    ],
    "service_key_patterns": [
        {"name": "Public service role", "pattern": r"NEXT_PUBLIC.*SERVICE_ROLE", "ignore_case": True},
        {"name": "Service role made public", "pattern": r"SERVICE_ROLE.*NEXT_PUBLIC", "ignore_case": True},
        {
            "name": "Service role key read in client code",
            "pattern": r"process\.env\.SUPABASE_SERVICE_ROLE_KEY",
            "ignore_case": True,
        },
    ],
    "insecure_patterns": [
        {"name": "eval() usage", "pattern": r"\beval\s*\(", "severity": "warning"},
        {"name": "innerHTML assignment", "pattern": r"\.innerHTML\s*=", "severity": "warning"},
        {"name": "dangerouslySetInnerHTML", "pattern": r"dangerouslySetInnerHTML", "severity": "warning"},
        {
            "name": "SQL injection risk",
            "pattern": r"\$\{.*\}.*(?:SELECT|INSERT|UPDATE|DELETE|FROM|WHERE)",
            "ignore_case": True,
            "severity": "blocker",
        },
        {
            "name": "Service key in NEXT_PUBLIC",
            "pattern": r"NEXT_PUBLIC.*SERVICE_ROLE|SERVICE_ROLE.*NEXT_PUBLIC",
            "ignore_case": True,
            "severity": "blocker",
        },
    ],
}

INDEPENDENCE_RULES: dict[str, Any] = {
    "name": "independence",
    "env_files": [".env", ".env.local", ".env.production"],
    "identifier_key": "PRODUCT_ID",
    "template_identifier_pattern": "factory|portfolio|template|example",
    "content_dirs": ["src", "app", "components", "pages"],
    "content_extensions": [".tsx", ".jsx", ".ts", ".js"],
    "scan_extensions": [".ts", ".tsx", ".js", ".jsx", ".json", ".md"],
    "forbidden_user_content": [
        _advisory("AI Factory mention", r"ai[-_\s]?factory"),
        _advisory("Portfolio mention", r"portfolio"),
        _advisory("Parent company reveal", r"part of\s+.*(family|group|portfolio)"),
        _advisory("Sister app mention", r"sister\s+(app|product)"),
        _advisory("Our other apps", r"our\s+other\s+(app|product)s?"),
    ],
    "cross_references": [
        {"name": "Recipe Genie reference", "codename": "recipe-genie", "pattern": r"recipe[-_]?genie"},
        {
            "name": "Daily Affirmation reference",
            "codename": "daily-affirmation",
            "pattern": r"daily[-_]?affirmation",
        },
        {"name": "Focus Timer reference", "codename": "focus-timer", "pattern": r"focus[-_]?timer"},
        {"name": "Vibe Check reference", "codename": "vibe-check", "pattern": r"vibe[-_]?check"},
    ],
    "internal_leakage": [
        _advisory("Portfolio collector", r"portfolio[-_]?collector"),
        _advisory("Factory conductor", r"factory[-_]?conductor"),
        _advisory("AI Factory internal path", r"dev/AI[-_]?factory"),
        _advisory("Factory scripts", r"scripts/factory"),
    ],
}

DEFAULT_RULES: dict[str, Any] = {
    "emotional": EMOTIONAL_RULES,
    "security": SECURITY_RULES,
    "independence": INDEPENDENCE_RULES,
}


@lru_cache(maxsize=1)
def get_default_config() -> GateConfig:
    """Return the built-in configuration, validated once per process."""
    return GateConfig(**DEFAULT_RULES)
