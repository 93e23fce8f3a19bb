"""
Review prompts.

Rule catalogue per review perspective and the builder that turns a chunk of
diff into a system/user prompt pair.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commit_review.config import ReviewConfig

SYSTEM = (
    "You are a professional AI code review expert analyzing code changes in "
    "git diff -U0 format. Your primary focus should be on the newly added and "
    "modified parts of the code, and ignore the deleted parts. Conduct the "
    "review strictly based on the following dimensions without introducing "
    "unrelated perspectives:"
)

INSTRUCTION = "Analyze from these perspectives"

RULES: dict[str, dict] = {
    "general": {
        "name": "General:",
        "checks": [
            "Potential bugs in new code",
            "Code smells in modifications",
            "Readability of changes",
            "Improvement suggestions",
        ],
        "severity_guidance": (
            "use high severity for critical issues, medium for moderate "
            "issues, low for minor suggestions"
        ),
    },
    "security": {
        "name": "Security:",
        "checks": [
            "XSS vulnerabilities",
            "CSRF protection",
            "CORS configuration",
            "Third-party script security",
        ],
        "severity_guidance": "high for critical vulnerabilities, medium for potential risks",
    },
    "performance": {
        "name": "Performance:",
        "checks": [
            "Algorithm changes impact",
            "Memory usage patterns",
            "I/O operation changes",
            "Concurrency modifications",
            "Render performance issues",
        ],
        "severity_guidance": (
            "high for severe bottlenecks such as infinite loops or stack "
            "overflows, medium for optimization opportunities"
        ),
    },
    "style": {
        "name": "Style:",
        "checks": [
            "Naming consistency",
            "Code organization changes",
            "Documentation updates",
            "Style guide compliance",
        ],
        "severity_guidance": "low severity for style suggestions",
    },
}

RESPONSE_REQUIREMENT = (
    "Output Requirements:\nPlease return JSON with the following fields:"
)

RESPONSE_FIELDS = {
    "result": "YES (approved) if no high severity issues, otherwise NO (rejected)",
    "list": "Array of found issues with details, containing:",
}

ITEM_FIELDS = {
    "severity": "high/medium/low",
    "perspective": "general/security/performance/style",
    "description": "Issue description in {language}",
    "suggestion": "Fix suggestion in {language}",
    "location": "File and function name in format: 'path:name'",
}


@dataclass(frozen=True)
class ReviewPrompt:
    """System and user messages for one review request."""

    system: str
    user: str


def enabled_perspectives(config: "ReviewConfig") -> list[str]:
    """Perspectives to review, ``general`` when none is switched on."""
    if config.custom_prompts:
        return ["customized"]
    perspectives = [
        name
        for name, enabled in (
            ("security", config.check_security),
            ("performance", config.check_performance),
            ("style", config.check_style),
        )
        if enabled
    ]
    return perspectives or ["general"]


def _rules_text(perspectives: list[str]) -> str:
    parts: list[str] = []
    for name in perspectives:
        rule = RULES[name]
        parts.append(rule["name"])
        parts.extend(f"- {check}" for check in rule["checks"])
        parts.append(rule["severity_guidance"])
    return "\n".join(parts)


def build_review_prompt(diff: str, config: "ReviewConfig") -> ReviewPrompt:
    """Build the prompt pair for one chunk of diff."""
    perspectives = enabled_perspectives(config)

    system_parts = [SYSTEM]
    if config.custom_prompts:
        system_parts.append(config.custom_prompts)
    else:
        system_parts.append(_rules_text(perspectives))

    system_parts.append(RESPONSE_REQUIREMENT)
    for key, description in RESPONSE_FIELDS.items():
        system_parts.append(f"{key}: {description}")
        if key == "list":
            for item, item_description in ITEM_FIELDS.items():
                if item == "perspective":
                    item_description = "/".join(perspectives)
                system_parts.append(
                    f"- {item}: {item_description.format(language=config.language)}"
                )

    user = f"{INSTRUCTION}:\n\n<git_diff>\n{diff}\n</git_diff>\n"
    return ReviewPrompt(system="\n".join(system_parts), user=user)
