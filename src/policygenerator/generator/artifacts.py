# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO


@dataclass
class OutputWriter:
    output_path: Optional[str] = None
    stream: Optional[TextIO] = None

    def write(self, content: bytes) -> None:
        text = content.decode("utf-8")
        if self.output_path:
            self._emit_file(self.output_path, text)
            return
        stream = self.stream or sys.stdout
        stream.write(text)
        stream.flush()

    def _emit_file(self, path: str, content: str) -> None:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
