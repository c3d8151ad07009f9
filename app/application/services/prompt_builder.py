from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from app.application.models import GenerationOptions, MetadataKind
from app.core.languages import resolve_language_name

METADATA_SYSTEM_PROMPT = "You are an SEO expert. You output valid JSON only."
ASSISTANT_SYSTEM_PROMPT = "You are a helpful assistant."
FILENAME_SYSTEM_PROMPT = "You are a helpful assistant that generates SEO-friendly filenames."

FIELD_INSTRUCTIONS: Dict[MetadataKind, str] = {
    MetadataKind.ALT_TEXT: (
        "Generate a concise, SEO-optimized alt text for this image. "
        "Under 125 characters. Output ONLY the text."
    ),
    MetadataKind.CAPTION: (
        "Generate a short, engaging caption for this image suitable for social media. "
        "Output ONLY the text."
    ),
    MetadataKind.DESCRIPTION: (
        "Generate a detailed description of the image content. Output ONLY the text."
    ),
    MetadataKind.FOCUS_KEYWORD: (
        "Identify the main subject or focus keyword of this image. "
        "Output ONLY the keyword/phrase."
    ),
    MetadataKind.TITLE: (
        "Generate a concise, SEO-friendly title for this image. Output ONLY the title."
    ),
    MetadataKind.FILENAME: (
        "Generate a short, descriptive filename for this image. "
        "It should be 3-5 words long, describing the main subject. "
        "Output ONLY the filename as space-separated words. "
        "Do NOT include the file extension. "
        "Do NOT use underscores or dashes, just spaces."
    ),
}


def build_prompts(
    kind: MetadataKind,
    language: Optional[str] = None,
    options: Optional[GenerationOptions] = None,
) -> Tuple[str, str]:
    """Return (system_prompt, user_prompt) for the requested kind.

    Unknown language codes silently resolve to English.
    """
    language_name = resolve_language_name(language)
    if kind is MetadataKind.METADATA:
        return METADATA_SYSTEM_PROMPT, _metadata_prompt(language_name, options or GenerationOptions())

    system_prompt = (
        FILENAME_SYSTEM_PROMPT if kind is MetadataKind.FILENAME else ASSISTANT_SYSTEM_PROMPT
    )
    return system_prompt, f"{FIELD_INSTRUCTIONS[kind]} Language: {language_name}."


def _metadata_prompt(language_name: str, options: GenerationOptions) -> str:
    fields: List[str] = [
        f'- "language": The language used (e.g., "{language_name}").',
        '- "alt-text": A concise, SEO-optimized alt text (under 125 chars).',
        '- "caption": A short, engaging caption for social media.',
        '- "description": A detailed description of the image content.',
        '- "filename": A short, SEO-friendly filename (lowercase, dashes, no extension).',
        '- "focus-keyword": The main subject or keyword of the image.',
    ]
    if options.tags:
        fields.append('- "tags": An array of 5-10 short, relevant SEO tags.')

    guidance: List[str] = []
    if options.keyword:
        guidance.append(
            f'Use "{options.keyword}" as the focus keyword and work it naturally '
            "into the alt text, caption and description."
        )
    if options.context:
        guidance.append(f"The image will be used in this context: {options.context}.")
    if options.tone:
        guidance.append(f"Write the caption and description in a {options.tone} tone.")
    if options.prefix:
        guidance.append(f'Start the caption with "{options.prefix}".')
    if options.suffix:
        guidance.append(f'End the caption with "{options.suffix}".')

    lines = [
        "Analyze the image and generate a structured JSON response with the following fields:",
        *fields,
    ]
    if guidance:
        lines.append("")
        lines.extend(guidance)
    lines.extend(
        [
            "",
            "Output ONLY valid JSON. No markdown formatting, no code blocks, no intro/outro text.",
            f"Language for all text fields: {language_name}.",
        ]
    )
    return "\n".join(lines)
