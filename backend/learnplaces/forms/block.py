"""
Block edit forms.

A form knows how to present a block for editing (``fill``), how to validate
submitted data (``get_block_data``) and how to copy validated data onto a
model (``apply``). Uploaded files are only checked here, storing them is up
to the caller.
"""
from typing import Any, Dict, Optional

from learnplaces.domain.block_types import (
    ACCORDION,
    ILIAS_LINK,
    MAP,
    PICTURE,
    RICH_TEXT,
    VIDEO,
)
from learnplaces.domain.exceptions import NotFoundError, ValidationError
from learnplaces.domain.visibility import VISIBILITIES, is_visibility
from learnplaces.models.ilias_link_block import ILIASLinkBlock

TITLE_MAX_LENGTH = 256
DESCRIPTION_MAX_LENGTH = 2000

TRUE_VALUES = {"1", "true", "on", "yes"}


def _submitted_values(data) -> Dict[str, Any]:
    if data is None:
        return {}
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if not isinstance(data, dict):
        raise ValidationError(
            "Request body must be an object",
            fields={"body": "must be an object"},
        )
    return dict(data)


class BlockForm:
    type: Optional[str] = None

    def __init__(self, block=None):
        self.block = block

    # -------------------------------------------------
    # Populate
    # -------------------------------------------------
    def fill(self) -> Dict[str, Any]:
        block = self.block
        values = {
            "id": block.id or 0,
            "type": self.type,
            "visibility": block.visibility,
            "sequence": block.sequence or 0,
        }
        values.update(self.fill_payload(block))
        return values

    def fill_payload(self, block) -> Dict[str, Any]:
        return {}

    # -------------------------------------------------
    # Validate
    # -------------------------------------------------
    def get_block_data(self, data, files=None, *, creating=True) -> Dict[str, Any]:
        """
        Validate submitted block data.

        Raises ValidationError with per-field messages and the submitted
        values. The submitted id and sequence are never taken over.
        """
        values = _submitted_values(data)
        errors: Dict[str, str] = {}
        cleaned: Dict[str, Any] = {}

        # Missing visibility keeps the current value or the configured default
        visibility = values.get("visibility")
        if visibility is not None and not is_visibility(visibility):
            errors["visibility"] = f"must be one of {', '.join(sorted(VISIBILITIES))}"
        elif visibility is not None:
            cleaned["visibility"] = visibility

        if values.get("type") not in (None, self.type):
            errors["type"] = f"expected {self.type}, the block type cannot be changed"

        cleaned.update(self.clean_payload(values, files or {}, errors, creating))

        if errors:
            raise ValidationError(
                f"Invalid {self.type} block data",
                fields=errors,
                values=values,
            )
        return cleaned

    def clean_payload(self, values, files, errors, creating) -> Dict[str, Any]:
        return {}

    # -------------------------------------------------
    # Apply
    # -------------------------------------------------
    def apply(self, block, cleaned: Dict[str, Any]) -> None:
        block.type = self.type
        if "visibility" in cleaned:
            block.visibility = cleaned["visibility"]
        self.apply_payload(block, cleaned)

    def apply_payload(self, block, cleaned) -> None:
        pass

    @staticmethod
    def _clean_text(values, errors, name, *, required, max_length=None):
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                errors[name] = "required"
            return None
        if not isinstance(value, str):
            errors[name] = "must be a string"
            return None
        value = value.strip()
        if max_length is not None and len(value) > max_length:
            errors[name] = f"must be at most {max_length} characters"
            return None
        return value


class RichTextBlockForm(BlockForm):
    type = RICH_TEXT

    def fill_payload(self, block):
        return {"text": (block.content or {}).get("text", "")}

    def clean_payload(self, values, files, errors, creating):
        text = self._clean_text(
            values, errors, "text", required=creating or "text" in values
        )
        return {"text": text} if text is not None else {}

    def apply_payload(self, block, cleaned):
        if "text" in cleaned:
            block.content = {"text": cleaned["text"]}


class PictureBlockForm(BlockForm):
    type = PICTURE

    def fill_payload(self, block):
        content = block.content or {}
        return {
            "title": content.get("title", ""),
            "description": content.get("description", ""),
            "media_url": block.media_url,
        }

    def clean_payload(self, values, files, errors, creating):
        cleaned = {}
        for name, max_length in (
            ("title", TITLE_MAX_LENGTH),
            ("description", DESCRIPTION_MAX_LENGTH),
        ):
            if name in values:
                cleaned[name] = self._clean_text(
                    values, errors, name, required=False, max_length=max_length
                ) or ""
        upload = files.get("file")
        if upload is not None and upload.filename:
            cleaned["file"] = upload
        elif creating:
            errors["file"] = "required"
        return cleaned

    def apply_payload(self, block, cleaned):
        content = dict(block.content or {})
        for name in ("title", "description"):
            content[name] = cleaned.get(name, content.get(name, ""))
        block.content = content


class VideoBlockForm(BlockForm):
    type = VIDEO

    def fill_payload(self, block):
        return {"media_url": block.media_url}

    def clean_payload(self, values, files, errors, creating):
        upload = files.get("file")
        if upload is not None and upload.filename:
            return {"file": upload}
        if creating:
            errors["file"] = "required"
        return {}

    def apply_payload(self, block, cleaned):
        block.content = {}


class ILIASLinkBlockForm(BlockForm):
    type = ILIAS_LINK

    def fill_payload(self, block):
        return {"ref_id": block.link.ref_id if block.link is not None else 0}

    def clean_payload(self, values, files, errors, creating):
        raw = values.get("ref_id")
        if raw is None or raw == "":
            if creating:
                errors["ref_id"] = "required"
            return {}
        try:
            ref_id = int(raw)
        except (TypeError, ValueError):
            errors["ref_id"] = "must be an integer"
            return {}
        if ref_id <= 0:
            errors["ref_id"] = "must be a positive reference id"
            return {}
        return {"ref_id": ref_id}

    def apply_payload(self, block, cleaned):
        block.content = {}
        if "ref_id" not in cleaned:
            return
        if block.link is None:
            block.link = ILIASLinkBlock()
        block.link.ref_id = cleaned["ref_id"]


class MapBlockForm(BlockForm):
    type = MAP

    def apply_payload(self, block, cleaned):
        block.content = {}


class AccordionBlockForm(BlockForm):
    type = ACCORDION

    def fill_payload(self, block):
        content = block.content or {}
        return {
            "title": content.get("title", ""),
            "expand": bool(content.get("expand", False)),
        }

    def clean_payload(self, values, files, errors, creating):
        cleaned = {}
        title = self._clean_text(
            values,
            errors,
            "title",
            required=creating or "title" in values,
            max_length=TITLE_MAX_LENGTH,
        )
        if title is not None:
            cleaned["title"] = title
        if "expand" in values:
            cleaned["expand"] = str(values["expand"]).lower() in TRUE_VALUES
        return cleaned

    def apply_payload(self, block, cleaned):
        content = dict(block.content or {})
        if "title" in cleaned:
            content["title"] = cleaned["title"]
        content["expand"] = cleaned.get("expand", content.get("expand", False))
        block.content = content


FORMS = {
    form.type: form
    for form in (
        RichTextBlockForm,
        PictureBlockForm,
        VideoBlockForm,
        ILIASLinkBlockForm,
        MapBlockForm,
        AccordionBlockForm,
    )
}


def get_form(kind, block=None) -> BlockForm:
    form_class = FORMS.get(kind)
    if form_class is None:
        raise NotFoundError(f"Unknown block type '{kind}'")
    return form_class(block)
