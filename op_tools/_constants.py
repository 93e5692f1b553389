"""Common literal values used across op_tools.

These constants keep the siteframe delimiter keywords and the automation
webhook paths in one place so the codec, the webhook client, and the tests
agree on the exact text exchanged with the site generator.

Examples
--------
>>> from op_tools import _constants
>>> _constants.OPEN_TAG_TEMPLATE.format(kind="part")
'<!--siteframe:part'
>>> _constants.CLOSE_TAG_TEMPLATE.format(kind="page")
'<!--siteframe:/page-->'
"""

OPEN_TAG_TEMPLATE = "<!--siteframe:{kind}"
CLOSE_TAG_TEMPLATE = "<!--siteframe:/{kind}-->"

DEFAULT_PART_TYPE = "custom"
DEFAULT_BLOCK_TYPE = "html"
HOME_ATTRIBUTE = "home"
HOME_FLAG = "true"
BLOCK_INDENT = "    "

UPDATE_WEBHOOK_PATH = "webhook/update-website"
REGENERATE_WEBHOOK_PATH = "webhook/regenerate-website"
REDEPLOY_WEBHOOK_PATH = "webhook/redeploy-website"
DISABLE_WEBHOOK_PATH = "webhook/disable-website"
