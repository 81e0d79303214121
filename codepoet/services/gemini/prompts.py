"""Prompt construction and response cleanup for code poems."""

import re

STYLE_INSTRUCTIONS = {
    "haiku": """STYLE: HAIKU
- EXACTLY 3 lines
- Syllable pattern: 5-7-5 (STRICT)
- Minimalist and zen
- Capture a moment or essence
- Use nature/code metaphors
Example structure:
Line 1 (5 syllables): [code element]
Line 2 (7 syllables): [what it does/feeling]
Line 3 (5 syllables): [resolution/insight]""",
    "sonnet": """STYLE: SONNET
- 14 lines total
- Follow ABAB CDCD EFEF GG rhyme scheme
- Iambic pentameter preferred but not required
- Elegant and classical
- Build narrative about the code
- Final couplet should provide insight or resolution""",
    "free verse": """STYLE: FREE VERSE
- 8-16 lines (flexible)
- No rhyme scheme required
- Natural rhythm and flow
- Creative line breaks for emphasis
- Vivid imagery
- Emotional and expressive
- Let the code's personality shine""",
    "cyberpunk": """STYLE: CYBERPUNK
- 8-12 lines
- Edgy, futuristic tone
- Tech noir aesthetic
- Use cyber/digital metaphors
- Dark but energetic
- References: neon, circuits, matrix, electric
- Make it feel like code in the future""",
}

DEFAULT_STYLE_INSTRUCTIONS = """STYLE: CREATIVE
- 8-12 lines
- Choose the best poetic form for this code
- Be creative and surprising
- Make it memorable"""

BOILERPLATE_PREFIXES = (
    "Here is the poem:",
    "Here's the poem:",
    "Poem:",
    "Here you go:",
)

_EXTRA_BLANK_LINES = re.compile(r"\n\s*\n\s*\n+")


def analyze_code(code: str) -> dict:
    """Cheap structural hints passed to the model alongside the code."""
    line_count = len(code.split("\n"))
    if line_count > 50:
        complexity = "complex"
    elif line_count > 20:
        complexity = "moderate"
    else:
        complexity = "simple"

    return {
        "lines": line_count,
        "complexity": complexity,
        "has_loops": "for" in code or "while" in code,
        "has_conditions": "if" in code or "else" in code,
        "has_functions": any(token in code for token in ("function", "def", "void", "=>")),
    }


def style_instructions(style: str) -> str:
    return STYLE_INSTRUCTIONS.get(style.lower(), DEFAULT_STYLE_INSTRUCTIONS)


def build_prompt(code: str, language: str, style: str) -> str:
    analysis = analyze_code(code)
    return f"""You are a code poet. Your task is to analyze this {language} code and write a {style} poem about it.

CODE:
{code}

CODE ANALYSIS:
- Lines: {analysis["lines"]}
- Complexity: {analysis["complexity"]}
- Contains loops: {str(analysis["has_loops"]).lower()}
- Contains conditionals: {str(analysis["has_conditions"]).lower()}
- Contains functions: {str(analysis["has_functions"]).lower()}

{style_instructions(style)}

CRITICAL RULES:
1. Write ONLY the poem - no explanations, no meta-commentary
2. Capture the ESSENCE of what this code does
3. Reference specific programming concepts poetically
4. Make it sound beautiful when read aloud
5. Be creative and avoid clichés
6. The poem should make developers smile

Generate the poem now:"""


def clean_poem(raw: str) -> str:
    """Strip boilerplate the model sometimes wraps around the poem."""
    cleaned = raw.strip()

    for prefix in BOILERPLATE_PREFIXES:
        if cleaned.lower().startswith(prefix.lower()):
            cleaned = cleaned[len(prefix):].strip()

    cleaned = cleaned.replace("```", "").strip()
    return _EXTRA_BLANK_LINES.sub("\n\n", cleaned)
