"""Configuration for SolveRelay, loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from openai import OpenAI

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


@dataclass
class Config:
    api_key: str
    llm_provider: str = "openai"  # "openai", "groq" or "ollama"
    base_url: str = ""
    solve_model: str = "gpt-4o"
    debug_model: str = "gpt-4o"
    mcq_model: str = "gpt-4o"
    extract_model: str = "gpt-4o"  # must accept image input
    solve_temperature: float = 0.6
    debug_temperature: float = 0.6
    mcq_temperature: float = 0.2
    extract_temperature: float = 0.2
    solve_max_tokens: int = 4096
    debug_max_tokens: int = 4096
    mcq_max_tokens: int = 2048
    extract_max_tokens: int = 2048
    top_p: float = 0.95
    default_language: str = "cpp"
    port: int = 3000
    max_content_length: int = 50 * 1024 * 1024  # base64 image payloads

    def create_openai_client(self) -> OpenAI:
        """Create an OpenAI client configured for the active LLM provider."""
        if self.llm_provider == "ollama":
            return OpenAI(api_key="ollama", base_url=self.base_url or "http://localhost:11434/v1")
        if self.llm_provider == "groq":
            return OpenAI(api_key=self.api_key, base_url=self.base_url or GROQ_BASE_URL)
        if self.base_url:
            return OpenAI(api_key=self.api_key, base_url=self.base_url)
        return OpenAI(api_key=self.api_key)

    @classmethod
    def from_env(cls, **overrides) -> Config:
        provider = overrides.pop("llm_provider", None) or os.environ.get("SOLVERELAY_LLM_PROVIDER", "openai")
        if provider not in ("openai", "groq", "ollama"):
            raise ValueError(f"Unsupported LLM provider: {provider}")
        key_var = "GROQ_API_KEY" if provider == "groq" else "OPENAI_API_KEY"
        api_key = overrides.pop("api_key", None) or os.environ.get(key_var, "")
        if not api_key and provider != "ollama":
            raise ValueError(f"{key_var} environment variable is required")
        kwargs: dict = {"api_key": api_key or "ollama", "llm_provider": provider}

        model = overrides.pop("model", None) or os.environ.get("SOLVERELAY_MODEL")
        if model:
            for flow in ("solve", "debug", "mcq", "extract"):
                kwargs[f"{flow}_model"] = model

        env_map: dict[str, tuple[str, type]] = {
            "SOLVERELAY_SOLVE_MODEL": ("solve_model", str),
            "SOLVERELAY_DEBUG_MODEL": ("debug_model", str),
            "SOLVERELAY_MCQ_MODEL": ("mcq_model", str),
            "SOLVERELAY_EXTRACT_MODEL": ("extract_model", str),
            "SOLVERELAY_TOP_P": ("top_p", float),
            "SOLVERELAY_DEFAULT_LANGUAGE": ("default_language", str),
            "PORT": ("port", int),
        }
        for env_var, (field_name, conv) in env_map.items():
            val = os.environ.get(env_var)
            if val is not None:
                kwargs[field_name] = conv(val)
        # provider-specific endpoint override
        base_var = {"groq": "GROQ_BASE_URL", "ollama": "OLLAMA_BASE_URL"}.get(provider, "OPENAI_BASE_URL")
        base_url = os.environ.get(base_var)
        if base_url:
            kwargs["base_url"] = base_url
        kwargs.update(overrides)
        return cls(**kwargs)
