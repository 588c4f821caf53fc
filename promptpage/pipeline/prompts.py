"""
Prompt templates and system instructions for the three pipeline agents.
"""

from langchain_core.prompts import PromptTemplate


ANALYSIS_SYSTEM_PROMPT = "Identify needed sections, features, and security considerations"

ANALYSIS_PROMPT = PromptTemplate.from_template(
    "Analyze this homepage requirement: {requirement}"
)


GENERATION_SYSTEM_PROMPT = """Include:
- Bootstrap-compatible HTML structure
- Responsive, mobile-first CSS styling
- Form validation or interactivity if applicable
- Semantic HTML for accessibility"""

GENERATION_PROMPT = PromptTemplate.from_template(
    """Generate a complete landing page (or form) code based on the following analysis:
{analysis}

Please return ONLY the code in three separate markdown code blocks with language labels exactly as follows:
- The first block is the HTML code.
- The second block is the CSS code.
- The third block is the JavaScript code (if not needed, leave it empty).

Do not include any extra commentary or text. The output should strictly be three markdown blocks.

For example:
```html
<!-- Your HTML code here -->
```
```css
/* Your CSS code here */
```
```javascript
// Your JavaScript code here
```
"""
)


VALIDATION_SYSTEM_PROMPT = "Provide a brief summary of any issues and improvements"

VALIDATION_PROMPT = PromptTemplate.from_template(
    """Review the following code for security, responsiveness, browser compatibility, and accessibility:
{code}"""
)


def build_analysis_prompt(requirement: str) -> str:
    return ANALYSIS_PROMPT.format(requirement=requirement)


def build_generation_prompt(analysis: str) -> str:
    return GENERATION_PROMPT.format(analysis=analysis)


def build_validation_prompt(code: str) -> str:
    return VALIDATION_PROMPT.format(code=code)
