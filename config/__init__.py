"""配置：应用设置与工作室初始数据。"""
