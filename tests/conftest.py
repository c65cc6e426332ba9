import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import slidekit` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


SAMPLE_MARP = """---
marp: true
theme: agentplexus
paginate: true
author: Jane Doe
keywords: ai, slides
footer: Internal
style: |
  .columns {
    display: flex;
    gap: 40px;
  }
---

<!-- _class: lead -->
<!-- _paginate: false -->

<!--
Welcome to the presentation.
[PAUSE:1000]
This is the introduction.
-->

# My Presentation
## A Subtitle Here

**Built with AI**

---

# The Problem

Building AI applications requires:

- **Multiple LLM providers** for redundancy
- **Different APIs** with incompatible formats
- Code duplication for error handling

---

<!-- _class: section-divider -->
<!-- _paginate: false -->

<!--
Section 2: Architecture. <break time="600ms"/>
Let's explore the design.
-->

# Section 2
## Architecture

Understanding the system design

---

<!--
The architecture uses a modular approach.
[PAUSE:1500]
Each component is independent.
-->

# Modular Design

```go
func main() {
    fmt.Println("Hello")
}
```

---

# Two Column Layout

<div class="columns">
<div class="column-left">

**Left Side**
- Item A
- Item B

</div>
<div class="column-right">

**Right Side**
- Item C
- Item D

</div>
</div>

---

# Data Table

| Feature | Status |
|---------|--------|
| Auth | Done |
| API | WIP |

---

# With Image

![Architecture diagram](./images/arch.png)

> This is a blockquote

---

<!-- _class: section-divider -->

# Section 3
## Conclusion

Final thoughts

---

# Thank You

1. Check the repo
2. Star on GitHub
3. Submit PRs
"""


@pytest.fixture
def sample_marp():
    return SAMPLE_MARP
