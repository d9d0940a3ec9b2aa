# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tool to list the regions databases can be created in."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import REGION_HOSTS
from ...models import Region, ToolArguments
from mcp.types import CallToolResult


LIST_REGIONS_TOOL_DESCRIPTION = 'Lists all available regions for creating databases'


class ListRegionsArgs(ToolArguments):
    """list-regions takes no arguments."""


@handle_exceptions
async def list_regions(context: ToolContext, args: ListRegionsArgs) -> CallToolResult:
    lines = ['Available regions:', '']
    for region in Region:
        lines.append(f'- {region.value} (host: {REGION_HOSTS[region]})')
    return text_result('\n'.join(lines))
