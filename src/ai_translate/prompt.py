from __future__ import annotations

from typing import Dict, Mapping, Optional

from .models import TranslationMode


# English names for the locale codes projects use most often. Anything else is
# shown by its code unless the project config supplies a name.
LANGUAGE_NAMES: Dict[str, str] = {
    "ar": "Arabic",
    "de": "German",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "hi": "Hindi",
    "id": "Indonesian",
    "it": "Italian",
    "ja": "Japanese",
    "ko": "Korean",
    "nl": "Dutch",
    "pl": "Polish",
    "pt": "Portuguese",
    "pt-BR": "Brazilian Portuguese",
    "ru": "Russian",
    "sv": "Swedish",
    "th": "Thai",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "vi": "Vietnamese",
    "zh": "Chinese",
    "zh-Hans": "Simplified Chinese",
    "zh-Hant": "Traditional Chinese",
}


def language_name(code: str, overrides: Optional[Mapping[str, str]] = None) -> str:
    if overrides and overrides.get(code):
        return str(overrides[code])
    if code in LANGUAGE_NAMES:
        return LANGUAGE_NAMES[code]
    # en_US / en-us style codes fall back to their base language
    base = code.replace("_", "-").split("-", 1)[0].lower()
    return LANGUAGE_NAMES.get(base, code)


_ROLE = (
    "You are an expert translator for mobile and web applications and you know "
    "the best practices of internationalization and localization with i18n JSON files."
)


def build_full_prompt(diff: str, locale_code: str, locale_name: str, *, source_locale: str = "en") -> str:
    """Ask for the complete, updated target file."""
    src_file = f"{source_locale}.json"
    tgt_file = f"{locale_code}.json"
    lines = [
        _ROLE,
        "",
        "You receive two inputs:",
        f"1. A git diff of the source locale file ({src_file}) showing new or changed text.",
        f"2. The current content of the {locale_name} file ({tgt_file}), attached separately. It may be missing for a new locale.",
        "",
        f"Translate the added and modified source strings into {locale_name} ({locale_code}) "
        f"and return the complete, updated {tgt_file}.",
        "",
        f"Git diff of {src_file}:",
        "```diff",
        diff,
        "```",
        "",
        "Rules:",
        "1. Find the keys the diff adds or modifies. Ignore removed lines.",
        f"2. Translate only those values into {locale_name}.",
        f"3. Every other key in {tgt_file} must come back unchanged: same value, same position. "
        "Do not re-translate, reorder or drop anything that is not in the diff.",
        "4. Put new keys where the diff puts them, next to related keys.",
        "5. Match the style, tone and terminology of the existing translations.",
        "6. Keep the JSON structure and keys as they are. Never translate keys.",
        "7. Leave placeholders such as {{variable}}, {name}, %s and <tag> untouched and in place.",
        f"8. Return only the JSON object for the whole {tgt_file}: no prose, no markdown, no code fences. "
        "The response is parsed as JSON directly.",
        "",
        "Example shape:",
        "{",
        '  "existingKeyUntouched": "existing translation",',
        '  "keyFromDiff": "new or updated translation"',
        "}",
    ]
    return "\n".join(lines) + "\n"


def build_delta_prompt(diff: str, locale_code: str, locale_name: str, *, source_locale: str = "en") -> str:
    """Ask only for the keys the diff adds or changes."""
    src_file = f"{source_locale}.json"
    tgt_file = f"{locale_code}.json"
    lines = [
        _ROLE,
        "",
        "You receive two inputs:",
        f"1. A git diff of the source locale file ({src_file}) showing new or changed text.",
        f"2. The current content of the {locale_name} file ({tgt_file}), attached separately for style and terminology.",
        "",
        f"Translate only the added and modified source strings into {locale_name} ({locale_code}) "
        "and return a JSON object with just those keys. Do not return the whole file.",
        "",
        f"Git diff of {src_file}:",
        "```diff",
        diff,
        "```",
        "",
        "Rules:",
        "1. Find the keys the diff adds or modifies. Ignore deletions.",
        f"2. Translate only those keys into {locale_name}.",
        "3. Leave out every key that is unchanged or deleted.",
        "4. Keep nested objects nested exactly as in the source file.",
        "5. Leave placeholders such as {{variable}}, {name}, %s and <tag> exactly as in the source.",
        "6. Return only the JSON object: no prose, no markdown, no code fences.",
        "",
        "Example shape (changed keys only):",
        "{",
        '  "section": {',
        '    "newKey": "translated value"',
        "  }",
        "}",
    ]
    return "\n".join(lines) + "\n"


def build_prompt(
        mode: TranslationMode,
        diff: str,
        locale_code: str,
        locale_name: str,
        *,
        source_locale: str = "en",
) -> str:
    if mode == TranslationMode.DELTA:
        return build_delta_prompt(diff, locale_code, locale_name, source_locale=source_locale)
    return build_full_prompt(diff, locale_code, locale_name, source_locale=source_locale)
