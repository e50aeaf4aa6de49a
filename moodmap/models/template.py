"""JournalTemplate data model."""

from typing import Literal

from pydantic import BaseModel, Field


class TemplateField(BaseModel):
    """A single prompt of a journal template."""

    name: str = Field(..., min_length=1, description="Prompt label shown on the form")
    type: Literal["text", "textarea", "number", "date", "mood"] = Field(
        default="text", description="Input kind used to render the prompt"
    )

    model_config = {"frozen": True}


class JournalTemplate(BaseModel):
    """A structured journal form made of ordered prompts."""

    id: str = Field(..., min_length=1, description="Template identifier")
    name: str = Field(..., min_length=1, description="Display name")
    prompts: tuple[TemplateField, ...] = Field(..., min_length=1, description="Ordered prompts")

    model_config = {"frozen": True}

    @property
    def labels(self) -> list[str]:
        """Prompt labels in template order."""
        return [prompt.name for prompt in self.prompts]

    def blank_answers(self) -> dict[str, str]:
        """Return an answer mapping with every prompt set to an empty string."""
        return {label: "" for label in self.labels}

    def unknown_labels(self, answers: dict[str, str]) -> list[str]:
        """List answer labels that are not prompts of this template."""
        labels = set(self.labels)
        return [label for label in answers if label not in labels]

    def ordered_answers(self, answers: dict[str, str]) -> dict[str, str]:
        """Return answers keyed by every prompt, in template order.

        Prompts without an answer map to an empty string. Labels that do
        not belong to the template are dropped; check them first with
        :meth:`unknown_labels`.
        """
        return {label: answers.get(label, "") for label in self.labels}
