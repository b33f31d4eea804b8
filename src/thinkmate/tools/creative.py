"""Creative learning tools.

Prompt templates sent through the tutor without conversation history.
"""

from dataclasses import dataclass

from ..ai.base import AIService


@dataclass(frozen=True)
class CreativeTool:
    id: str
    name: str
    description: str
    template: str

    def prompt(self, topic: str) -> str:
        return self.template.format(topic=topic)


CREATIVE_TOOLS: dict[str, CreativeTool] = {tool.id: tool for tool in (
    CreativeTool(
        id="analogy",
        name="Analogy Generator",
        description="Explain complex concepts using simple analogies.",
        template='Explain "{topic}" using a simple, creative analogy that a student would understand.',
    ),
    CreativeTool(
        id="mnemonics",
        name="Memory Aids",
        description="Create mnemonics and acronyms to memorize lists.",
        template='Create a catchy mnemonic or acronym to help remember "{topic}". '
                 "Explain what each letter stands for.",
    ),
    CreativeTool(
        id="visual",
        name="Visual Describer",
        description="Generate a text description for a mental image/diagram.",
        template='Describe a visual diagram or mental image that would effectively explain "{topic}". '
                 "Be descriptive.",
    ),
    CreativeTool(
        id="simplify",
        name="The 5-Year-Old Test",
        description="Rewrite a topic so a 5-year-old could understand it.",
        template='Explain "{topic}" as if you are talking to a smart 5-year-old child.',
    ),
    CreativeTool(
        id="video_analysis",
        name="Video Concept Extractor",
        description="Paste a video transcript or text to extract key learning points.",
        template="Analyze this video transcript/text and extract the key learning outcomes, "
                 "main concepts, and a summary: \n\n{topic}",
    ),
    CreativeTool(
        id="animation",
        name="Animation Scripter",
        description="Generate a script for an educational animation.",
        template='Write a short script for a 1-minute educational animation about "{topic}". '
                 "Include visual descriptions for each scene and the voiceover narration.",
    ),
)}


async def run_creative_tool(ai: AIService, tool_id: str, topic: str) -> str | None:
    """Run a creative tool on a topic.

    Returns:
        The generated text, or None for a blank topic

    Raises:
        KeyError: If tool_id is unknown
    """
    tool = CREATIVE_TOOLS[tool_id]
    if not topic.strip():
        return None
    return await ai.generate_response(tool.prompt(topic), [])
