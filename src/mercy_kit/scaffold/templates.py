"""Text templates for the files ``mercy init`` writes.

Templates use ``str.format`` placeholders; literal braces are doubled.
"""

from __future__ import annotations

from pathlib import Path

TEMPLATE_SOURCE_PATH = Path(__file__).with_name("resources") / "integration.py.tmpl"
TEMPLATE_CLASS_NAME = "IntegrationTemplate"
TEMPLATE_NAME_REFERENCE = "self.display_name"

SUBCLASS_SOURCE = '''\
"""{name} integration.

{description}
"""

import logging

from mercy_kit.integration import IntegrationBase

logger = logging.getLogger(__name__)


class {class_name}(IntegrationBase):
    async def on_load(self):
        return await super().on_load()

    async def initialize(self):
        await super().initialize()

        # Add your initialization logic here
        logger.info("[%s] Initialized successfully", {name_literal})

    async def on_message(self, message):
        await super().on_message(message)

        # Add your message handling logic here

    async def on_member_join(self, member):
        await super().on_member_join(member)

        # Add your member join logic here

    # Override other methods as needed


__integration__ = {class_name}
'''

TEST_STUB = '''\
"""Smoke test for the {name} integration.

Run with ``python -m pytest test`` or ``python test/test_integration.py``.
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.integration import {class_name}  # noqa: E402


def test_integration_smoke():
    config = {{"name": {name_literal}, "version": "1.0.0"}}
    integration = {class_name}(config)

    asyncio.run(integration.initialize())
    assert integration.get_uptime() == "0h 0m"


if __name__ == "__main__":
    test_integration_smoke()
    print("All tests passed!")
'''

README = """\
# {name}

{description}

## Installation

1. Install dependencies:
   ```bash
   pip install {requirements}
   ```

2. Test your integration:
   ```bash
   python -m pytest test
   ```

3. Validate integration:
   ```bash
   mercy validate
   ```

## Configuration

This integration supports the following settings:

{settings}

## Commands

(Add your commands here)

## Events

This integration responds to the following Discord events:

- `messageCreate`: Processes new messages
- `interactionCreate`: Handles slash commands and interactions

## Development

### Testing

Run tests with:
```bash
python -m pytest test
```

### Validation

Validate your integration code:
```bash
mercy validate
```

## Support

- **Developer**: {developer_name}
- **Email**: {developer_email}
{github_line}

## License

MIT License - see LICENSE file for details.
"""

LICENSE = """\
MIT License

Copyright (c) {year} {developer_name}

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""
