class PostLength:
    TITLE_MAX = 255 # タイトル最大文字数
    SLUG_MAX = 255 # スラッグ最大文字数
    EXCERPT_MAX = 500 # 抜粋最大文字数
    PREVIEW_MAX = 200 # 一覧用プレビュー文字数

class CategoryLength:
    NAME_MAX = 100 # カテゴリ名最大文字数
    SLUG_MAX = 100 # スラッグ最大文字数

class PostListLimit:
    DEFAULT = 10 # デフォルト取得件数
    MAX = 100 # 最大取得件数

class ReadingSpeed:
    WORDS_PER_MINUTE = 200 # 読了時間の計算に使う1分あたりの単語数
