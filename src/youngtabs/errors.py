# Copyright [2024] [Dashiell Stander]
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


class YoungTabsError(Exception):
    """Base class for every error raised by youngtabs."""


class InvalidPartitionError(YoungTabsError, ValueError):
    """A sequence is not non-increasing or has a part that is not a positive integer."""


class IndexOutOfRange(YoungTabsError, IndexError):
    """A position outside of a partition was read or written."""


class SizeMismatchError(YoungTabsError, ValueError):
    """The fill of a tableau does not have one value per cell."""


class SkewDiagramError(YoungTabsError, ValueError):
    """The inner partition of a skew diagram is not contained in the outer one."""


class SkewSizeError(SkewDiagramError):
    """The inner partition has more cells than the outer one."""


class SkewLengthError(SkewDiagramError):
    """The inner partition has more rows than the outer one."""


class RowContainmentError(SkewDiagramError):
    """A row of the inner partition is longer than the same row of the outer one."""


class NumericOverflowError(YoungTabsError, OverflowError):
    """A partition count was pushed through int64 arithmetic past the point where it overflows."""
