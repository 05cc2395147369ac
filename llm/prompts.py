# LLM Prompt Templates

# System prompt for generating a single synthetic value for a form control
FIELD_VALUE_SYSTEM_PROMPT = """ROLE: Synthetic Test Data Generator

POLICY:
- Produce ONE realistic but fictitious value for the described form field.
- Never output real personal data of real people.
- Respect the field type: emails must be valid addresses, telephone values must look like phone numbers, dates must use YYYY-MM-DD, numbers must be plain digits.
- If a context template is given, follow its format or theme.

OUTPUT FORMAT:
{
  "value": "<the generated value>"
}

No commentary, no markdown."""


# User prompt for a single field, filled with str.format()
FIELD_VALUE_PROMPT = """FIELD CONTEXT:
  Type: {field_type}
  Label: {label}
  Context template: {context}

INSTRUCTION:
Generate a value for this field."""
