"""Tag syntax shared by the loader and the compiler passes."""

import re

# {{@ header.html }}
PARTIAL = re.compile(r"\{\{@\s*(\S+?)\s*\}\}")

# {{> name }}
BLOCK_HOLDER = re.compile(r"\{\{>\s*(\S+?)\s*\}\}")

# {{< name }} ... {{< }}
BLOCK_DEFINE = re.compile(r"\{\{<\s*(\S+?)\s*\}\}([\s\S]*?)\{\{<\s*\}\}")

# {{= expr }}
INTERPOLATE = re.compile(r"\{\{=([\s\S]+?)\}\}")

# {{? cond }}, {{?? cond }}, {{?? }}, {{? }}
CONDITIONAL = re.compile(r"\{\{\?(\?)?\s*([\s\S]*?)\s*\}\}")

# {{~ items : item : index }}, {{~ }}
ITERATIVE = re.compile(
    r"\{\{~\s*(?:\}\}|([\s\S]+?)\s*:\s*(\w+)\s*(?::\s*(\w+))?\s*\}\})"
)

# {{ stmt }}; lazy body followed by any closing braces of its own
EVALUATE = re.compile(r"\{\{([\s\S]+?\}*)\}\}")
