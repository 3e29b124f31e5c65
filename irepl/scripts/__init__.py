"""Hook scripts for prompts, templates, vi-style keys and an IPython bridge."""