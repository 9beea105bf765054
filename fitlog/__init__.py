# -*- coding: utf-8 -*-
"""fitlog — workout logging with LLM-estimated calorie burn.

`fitlog.api` serves the estimation gateway, `fitlog.client` holds the logging
form, its local history and the command line front end.
"""
