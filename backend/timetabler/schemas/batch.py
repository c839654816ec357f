from pydantic import BaseModel, Field, field_validator

SECTION_LABEL_MAX_LENGTH = 20


class BatchCreate(BaseModel):
    batch_number: str = Field(min_length=1, max_length=20)
    number_of_years: int = Field(default=4, ge=1, le=8)
    sections: list[str] = Field(default_factory=lambda: ["A"], min_length=1, max_length=26)
    departments: list[str] = Field(default_factory=list)

    @field_validator("sections")
    @classmethod
    def validate_sections(cls, value: list[str]) -> list[str]:
        cleaned = [label.strip() for label in value if label.strip()]
        if not cleaned:
            raise ValueError("At least one section label is required")
        duplicates = sorted({label for label in cleaned if cleaned.count(label) > 1})
        if duplicates:
            raise ValueError(f"Duplicate section labels: {', '.join(duplicates)}")
        too_long = [label for label in cleaned if len(label) > SECTION_LABEL_MAX_LENGTH]
        if too_long:
            raise ValueError(
                f"Section labels must be at most {SECTION_LABEL_MAX_LENGTH} characters: {', '.join(too_long)}"
            )
        return cleaned


class SemesterCreate(BaseModel):
    batch_id: str = Field(min_length=1, max_length=36)
    semester_number: int = Field(ge=1, le=20)
    name: str = Field(min_length=1, max_length=100)
    is_active: bool = True
