"""Shared test fixtures and configuration."""

import pytest

from hunkindex.review import create_hunk


@pytest.fixture
def sample_diff():
    """Sample git diff: two hunks in one file, plus a new file."""
    return """diff --git a/src/main.py b/src/main.py
index 1234567..abcdefg 100644
--- a/src/main.py
+++ b/src/main.py
@@ -10,2 +10,4 @@ def main():
     print("Hello")
+    print("World")
+    print("!")
     return 0
@@ -20,1 +22,3 @@ def helper():
     pass
+    # New comment
+    return True
diff --git a/tests/test_main.py b/tests/test_main.py
new file mode 100644
index 0000000..1234567
--- /dev/null
+++ b/tests/test_main.py
@@ -0,0 +1,4 @@
+import pytest
+
+def test_main():
+    assert True
"""


@pytest.fixture
def two_file_diff():
    """Sample git diff with exactly one hunk in each of two files."""
    return """diff --git a/a.py b/a.py
index 1111111..2222222 100644
--- a/a.py
+++ b/a.py
@@ -1,3 +1,3 @@
 import os
-x = 1
+x = 2
 y = 3
diff --git a/b.py b/b.py
index 3333333..4444444 100644
--- a/b.py
+++ b/b.py
@@ -5,2 +5,3 @@ class B:
     def run(self):
+        self.ready = True
         return self
"""


@pytest.fixture
def deleted_file_diff():
    """Sample git diff deleting a file."""
    return """diff --git a/old.py b/old.py
deleted file mode 100644
index 1234567..0000000
--- a/old.py
+++ /dev/null
@@ -1,2 +0,0 @@
-a = 1
-b = 2
"""


@pytest.fixture
def binary_diff():
    """Sample git diff with a binary file between two text files."""
    return """diff --git a/src/main.py b/src/main.py
index 1234567..abcdefg 100644
--- a/src/main.py
+++ b/src/main.py
@@ -10,2 +10,3 @@ def main():
     print("Hello")
+    print("World")
     return 0
diff --git a/image.png b/image.png
index 1234567..abcdefg 100644
Binary files a/image.png and b/image.png differ
diff --git a/src/util.py b/src/util.py
index 1234567..abcdefg 100644
--- a/src/util.py
+++ b/src/util.py
@@ -1,2 +1,3 @@
 def util():
+    # utility function
     pass
"""


@pytest.fixture
def review_hunks():
    """Three hunks of different shapes for coverage tests."""
    return [
        create_hunk(1, "file1.ts", 0, 1, 1, [" a", "-b", "+c", " d"]),
        create_hunk(2, "file2.ts", 0, 10, 10, [" x", " y", " z"]),
        create_hunk(3, "file3.ts", 0, 20, 20, ["+new1", "+new2", "+new3", "+new4", "+new5"]),
    ]
