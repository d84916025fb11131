"""Instruction template for model-backed contact extraction."""

CONTACT_EXTRACTION_TEMPLATE = """\
You are an AI assistant that extracts contact information from resume/biography documents.

Parse the following corpus of documents and extract ONLY contact information. Return a JSON object with the exact structure shown below. Prevent duplicate entries in email and phone arrays.

REQUIRED JSON STRUCTURE:
{{
  "contactInformation": {{
    "fullName": "<string representing the user's name>",
    "email": ["<unique email addresses only>"],
    "phones": ["<unique phone numbers only>"]
  }}
}}

IMPORTANT RULES:
1. Return ONLY valid JSON - no additional text or explanations
2. Remove duplicates from email and phone arrays
3. If no name is found, use empty string for fullName
4. If no emails are found, use empty array []
5. If no phones are found, use empty array []
6. Normalize phone numbers to a consistent format
7. Ensure email addresses are valid format

CORPUS TO PARSE:
{corpus}

JSON OUTPUT:"""


def build_contact_prompt(corpus: str) -> str:
    """Embed ``corpus`` in the extraction instructions."""
    return CONTACT_EXTRACTION_TEMPLATE.format(corpus=corpus)
