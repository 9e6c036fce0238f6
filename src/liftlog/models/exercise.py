"""Exercise definitions and metadata."""

from dataclasses import dataclass, field
from uuid import uuid4


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid4().hex


@dataclass
class Exercise:
    """An exercise in the user's library."""

    name: str
    target_muscle_group: str
    instructions: str | None = None
    form_cues: str | None = None  # newline-delimited
    video_url: str | None = None
    id: str = field(default_factory=new_id)

    @property
    def form_cue_list(self) -> list[str]:
        """Form cues split into individual non-empty lines."""
        if not self.form_cues:
            return []
        return [line.strip() for line in self.form_cues.splitlines() if line.strip()]

    def to_dict(self, seed_format: bool = False) -> dict:
        """Convert to dictionary for storage or seed export."""
        if seed_format:
            return {
                "name": self.name,
                "targetMuscleGroup": self.target_muscle_group,
                "instructions": self.instructions,
                "formCues": self.form_cues,
                "videoURL": self.video_url,
            }
        return {
            "id": self.id,
            "name": self.name,
            "target_muscle_group": self.target_muscle_group,
            "instructions": self.instructions,
            "form_cues": self.form_cues,
            "video_url": self.video_url,
        }

    @classmethod
    def from_dict(cls, data: dict, seed_format: bool = False) -> "Exercise":
        """Create from dictionary.

        Seed-format dictionaries never carry an id, so a fresh one is assigned.
        """
        if seed_format:
            return cls(
                name=data["name"],
                target_muscle_group=data["targetMuscleGroup"],
                instructions=data.get("instructions"),
                form_cues=data.get("formCues"),
                video_url=data.get("videoURL"),
            )
        kwargs = {}
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(
            name=data["name"],
            target_muscle_group=data["target_muscle_group"],
            instructions=data.get("instructions"),
            form_cues=data.get("form_cues"),
            video_url=data.get("video_url"),
            **kwargs,
        )
