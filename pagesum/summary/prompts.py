"""Fixed prompt texts for page summaries."""

SYSTEM_PROMPT = "You're a news reporter AI."

USER_PROMPT_TEMPLATE = (
    "Given the news body text: {news_body}, which may include some irrelevant "
    "information, identify the key arguments and the article's conclusion. "
    "From these important elements, construct a succinct summary that "
    "encapsulates its news value, disregarding any unnecessary details."
)


def build_user_prompt(news_body: str) -> str:
    """Embed *news_body* in the summary instruction template."""
    return USER_PROMPT_TEMPLATE.format(news_body=news_body)
