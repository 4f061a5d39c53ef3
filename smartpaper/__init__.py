"""SmartPaper AI 后端：试卷、提交、评分与学习资料的 REST API。"""

__version__ = "0.1.0"
