from typing import Any, Dict

from formapi.models.form import FormConfig


def generate_schema(config: FormConfig) -> Dict[str, Any]:
    """
    Build the declarative schema sent alongside submitted values:
    {
      "type": "object",
      "properties": { "name": {"type": "string", "minLength": 2}, ... },
      "required": ["name", ...]
    }
    Fields without rules are plain strings.
    """
    schema = {"type": "object", "properties": {}, "required": []}

    for field in config.fields:
        rules = field.validation_rules
        prop = {"type": rules.type if rules and rules.type else "string"}

        if rules is not None:
            if rules.required:
                schema["required"].append(field.id)
            if rules.min_length:
                prop["minLength"] = rules.min_length
            if rules.max_length:
                prop["maxLength"] = rules.max_length

        schema["properties"][field.id] = prop

    return schema
