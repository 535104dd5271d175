"""HTML fragments for the model grid, cards and the detail dialog.

Everything here is a pure ``data -> str`` function; attaching the markup to the
page is left to ``static/app.js``.
"""

from __future__ import annotations

from jinja2 import Environment, FileSystemLoader, select_autoescape

from model_finder.core.config import PACKAGE_DIR, Settings, settings as default_settings
from model_finder.schemas import ModelEntry
from model_finder.services.model_filter import GridView
from model_finder.services.normalizer import format_number


CARD_TAG_LIMIT = 3
CARD_DESCRIPTION_LIMIT = 160

CATEGORY_BADGES: dict[str, tuple[str, str]] = {
    "llm": ("🧠", "LLM"),
    "embedding": ("🔗", "Embedding"),
    "ocr": ("👁️", "OCR"),
    "tts": ("🔊", "TTS"),
    "stt": ("🎤", "STT"),
}

GENERIC_SNIPPETS: dict[str, str] = {
    "llm": """from transformers import AutoModelForCausalLM, AutoTokenizer

model_name = "{model_id}"
tokenizer = AutoTokenizer.from_pretrained(model_name)
model = AutoModelForCausalLM.from_pretrained(model_name, device_map="auto")

# Example usage
inputs = tokenizer("Hello, how are you?", return_tensors="pt").to(model.device)
outputs = model.generate(**inputs, max_new_tokens=100)
print(tokenizer.decode(outputs[0], skip_special_tokens=True))""",
    "embedding": """from sentence_transformers import SentenceTransformer

model = SentenceTransformer("{model_id}")

# Embed some sentences
sentences = ["This is a sentence.", "This is another sentence."]
embeddings = model.encode(sentences)

print(f"Embedding shape: {{embeddings.shape}}")""",
    "ocr": """from transformers import pipeline

pipe = pipeline("image-to-text", model="{model_id}")

# Process an image
result = pipe("image.png")
print(result)""",
    "tts": """from transformers import pipeline

pipe = pipeline("text-to-speech", model="{model_id}")

# Text to speech
result = pipe("Hello, this is a test.")
# result["audio"] holds the waveform""",
    "stt": """from transformers import pipeline

pipe = pipeline("automatic-speech-recognition", model="{model_id}")

# Transcribe audio
result = pipe("audio.mp3")
print(result["text"])""",
}


def generic_snippet(model: ModelEntry) -> str:
    template = GENERIC_SNIPPETS.get(model.category, GENERIC_SNIPPETS["llm"])
    return template.format(model_id=model.id)


def _build_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(PACKAGE_DIR / "templates")),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["format_number"] = format_number
    env.globals["category_badges"] = CATEGORY_BADGES
    env.globals["card_tag_limit"] = CARD_TAG_LIMIT
    env.globals["card_description_limit"] = CARD_DESCRIPTION_LIMIT
    return env


env = _build_env()


def render_card(model: ModelEntry) -> str:
    return env.get_template("_card.html").render(model=model)


def render_grid(view: GridView) -> str:
    return env.get_template("_grid.html").render(view=view)


def render_detail(model: ModelEntry, settings: Settings | None = None) -> str:
    cfg = settings or default_settings
    code = None
    if not model.python_code and model.from_api:
        code = generic_snippet(model)
    return env.get_template("_detail.html").render(
        model=model,
        hub_url=cfg.hub_page_url(model.id),
        generic_code=code,
    )


def render_page(view: GridView, settings: Settings | None = None) -> str:
    cfg = settings or default_settings
    return env.get_template("page.html").render(
        view=view,
        grid=render_grid(view),
        categories=["all", *CATEGORY_BADGES],
        sources=[("recommended", "Recommended"), ("trending", "Trending"), ("new", "New")],
        copy_feedback_ms=cfg.copy_feedback_ms,
    )
