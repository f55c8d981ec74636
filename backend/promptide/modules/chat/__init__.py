# Chat generation: keyword templates and prompts
