class LLMGenerationError(Exception):
    """Exception for errors when generating a response from LLM."""

    def __init__(
        self,
        message: str | None = None,
        prompt: str | None = None,
        provider: str | None = None,
        model: str | None = None,
    ):
        base_message = message if message is not None else "LLM generation error"
        details = []
        if provider is not None:
            details.append(f"Provider: {provider}")
        if model is not None:
            details.append(f"Model: {model}")
        if prompt is not None:
            # Prompts embed field labels only, keep them short in messages
            details.append(f"Prompt: {prompt[:200]}.")
        self.message = " ".join([base_message] + details) if details else base_message
        self.provider = provider
        self.model = model
        super().__init__(self.message)
