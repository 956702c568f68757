# modpacker/localization/messages.py
"""
Message catalog for every user-facing log line.

Strings live here under stable keys so the build log can be rendered in the
configured locale. Use `MessageCatalog(locale).t(key, **kwargs)`.
"""
from __future__ import annotations

from typing import Any

__all__ = ["SUPPORTED_LOCALES", "MessageCatalog"]



_CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        "config.invalid_locale": "Unknown locale '{value}', falling back to 'en'",
        "config.invalid_log_level": "Unknown log level '{value}', falling back to 'info'",
        "run.aborted": "Build aborted: {error}",
        "run.summary": "Packaged {ok}/{total} mod(s) into '{results}'",
        "mirror.start": "Copying mods from '{src}' to '{dst}'",
        "ts.start": "===== TypeScript processing started",
        "ts.none": "No TypeScript projects found",
        "ts.compiled": "    {project} compiled",
        "ts.failed": "TypeScript compilation of '{project}' exited with {code}:\n{output}",
        "ts.launch_failed": "Cannot launch TypeScript compiler for '{project}': {error}",
        "ts.done": "##### TypeScript processing finished",
        "mod.start": "===== Processing {modDir}",
        "mod.manifest_failed": "Skipping '{path}': {error}",
        "mod.reconciled": "Manifest '{path}' updated with {added} new file(s)",
        "mod.save_failed": "Could not write manifest '{path}', continuing with in-memory copy: {error}",
        "mod.reconcile_failed": "Skipping '{path}': {error}",
        "mod.package_failed": "Packaging '{path}' failed: {error}",
        "mod.packaged": "    {name} -> {archive} ({files} file(s))",
        "pause.prompt": "Press Enter to exit...",
    },
    "zh_cn": {
        "config.invalid_locale": "未知的语言环境 '{value}'，使用 'en'",
        "config.invalid_log_level": "未知的日志级别 '{value}'，使用 'info'",
        "run.aborted": "构建中止: {error}",
        "run.summary": "已打包 {ok}/{total} 个mod到 '{results}'",
        "mirror.start": "正在复制mod: '{src}' -> '{dst}'",
        "ts.start": "===== ts相关处理开始",
        "ts.none": "未找到TypeScript项目",
        "ts.compiled": "    {project} 编译完毕",
        "ts.failed": "'{project}' 的TypeScript编译退出码 {code}:\n{output}",
        "ts.launch_failed": "无法为 '{project}' 启动TypeScript编译器: {error}",
        "ts.done": "##### ts相关处理结束",
        "mod.start": "===== 处理 {modDir}",
        "mod.manifest_failed": "跳过 '{path}': {error}",
        "mod.reconciled": "boot.json '{path}' 新增 {added} 个文件",
        "mod.save_failed": "无法写入 '{path}'，继续使用内存中的副本: {error}",
        "mod.reconcile_failed": "跳过 '{path}': {error}",
        "mod.package_failed": "打包 '{path}' 失败: {error}",
        "mod.packaged": "    {name} -> {archive} ({files} 个文件)",
        "pause.prompt": "按回车键退出...",
    },
    "zh_tw": {
        "config.invalid_locale": "未知的語言環境 '{value}'，使用 'en'",
        "config.invalid_log_level": "未知的日誌級別 '{value}'，使用 'info'",
        "run.aborted": "構建中止: {error}",
        "run.summary": "已打包 {ok}/{total} 個mod到 '{results}'",
        "mirror.start": "正在複製mod: '{src}' -> '{dst}'",
        "ts.start": "===== ts相關處理開始",
        "ts.none": "未找到TypeScript項目",
        "ts.compiled": "    {project} 編譯完畢",
        "ts.failed": "'{project}' 的TypeScript編譯退出碼 {code}:\n{output}",
        "ts.launch_failed": "無法為 '{project}' 啟動TypeScript編譯器: {error}",
        "ts.done": "##### ts相關處理結束",
        "mod.start": "===== 處理 {modDir}",
        "mod.manifest_failed": "跳過 '{path}': {error}",
        "mod.reconciled": "boot.json '{path}' 新增 {added} 個文件",
        "mod.save_failed": "無法寫入 '{path}'，繼續使用內存中的副本: {error}",
        "mod.reconcile_failed": "跳過 '{path}': {error}",
        "mod.package_failed": "打包 '{path}' 失敗: {error}",
        "mod.packaged": "    {name} -> {archive} ({files} 個文件)",
        "pause.prompt": "按回車鍵退出...",
    },
}

SUPPORTED_LOCALES: tuple[str, ...] = tuple(_CATALOGS)



class MessageCatalog:
    """Formats messages for one locale; unknown locales use English."""

    def __init__(self, locale: str = "en") -> None:
        self.locale = locale if locale in _CATALOGS else "en"
        self._catalog = _CATALOGS[self.locale]

    def t(self, key: str, **kwargs: Any) -> str:
        template = self._catalog.get(key) or _CATALOGS["en"].get(key)
        if template is None:
            return f"<{key}>"
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError):
            # Missing placeholder values: show the raw template
            return template
