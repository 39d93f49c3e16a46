class PROMPTS:
    EXTRACTION_INSTRUCTION = """You are a world-class prompt engineer specializing in the FLUX.1 Kontext image editing tool. Your task is to take a user's simple, natural language request for an image edit (which may be in Chinese) and deconstruct it into a structured format with English values, suitable for generating a professional Kontext prompt.

You must identify the key components of the edit:
- what to change (TARGET)
- how to change it (CHANGE)
- what to keep the same (PRESERVE)
- the desired style (STYLE)

**IMPORTANT:** It is crucial to infer what should be preserved even if the user doesn't explicitly state it. For example, if a user says "change the woman's shirt to red", you must infer that the woman's face, hair, and the background should be preserved.

Use the extract_prompt_parts function to return structured data, with all values in English."""

    USER_REQUEST = """{instruction}

User's request: "{user_input}\""""

    # Sentence fragments for the final Kontext prompt, in assembly order.
    FINAL_PREFIX = "Transform the {target}"
    FINAL_CHANGE = " to {change}"
    FINAL_PRESERVE = ", while maintaining the {preserve}"
    FINAL_STYLE = ". Style: {style}."
    FINAL_END = "."


EXTRACTION_FUNCTION = {
    'name': 'extract_prompt_parts',
    'description': 'Deconstruct an image edit request into the four parts of a FLUX.1 Kontext prompt',
    'parameters': {
        'type': 'object',
        'properties': {
            'target': {
                'type': 'string',
                'description': 'The specific object, person, or area to be edited. Be concise and clear.'
            },
            'change': {
                'type': 'string',
                'description': 'A detailed description of the desired modification or transformation.'
            },
            'preserve': {
                'type': 'string',
                'description': (
                    'A comma-separated list of all important elements that must remain unchanged. '
                    'Infer this from context. For example, if changing a shirt, preserve the '
                    "person's face, hair, and the background."
                )
            },
            'style': {
                'type': 'string',
                'description': (
                    "The desired artistic style, quality, or technical parameters (e.g., "
                    "'photorealistic, 4k, cinematic lighting'). If not specified, use "
                    "'highly detailed, photorealistic'."
                )
            },
        },
        'required': ['target', 'change', 'preserve', 'style']
    }
}
