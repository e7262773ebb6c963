"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_POST = """\
---
title: Getting Started
description: First steps
date: 2025-03-01
tags: python, blog
---
# Getting Started

An intro with **bold** and *italic* text.

## Install Steps

- clone the repo
- run `make`

```bash
echo "<ok>"
```

### Next

See [docs](https://example.com/docs).
"""


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST
